"""Game session - the state machine for one game of Impostor."""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from ..communication.events import EventLog, Visibility
from .errors import InsufficientPlayers, InvalidVoteTarget
from .phases import GamePhase, PhaseManager
from .reveal import RevealSequencer
from .roles import RoleCard
from .timer import TURN_TIME_SEC, TimerState, TurnTimer
from .words import DEFAULT_WORD_BANK, RANDOM_CATEGORY, WordBank, WordPair

MIN_PLAYERS = 3
MAX_PLAYERS = 7
ROUNDS_TOTAL = 3


@dataclass
class GameConfig:
    """Configuration for a game."""
    min_players: int = MIN_PLAYERS
    max_players: int = MAX_PLAYERS
    rounds_total: int = ROUNDS_TOTAL
    turn_seconds: int = TURN_TIME_SEC
    default_category: str = RANDOM_CATEGORY
    word_bank_path: Optional[str] = None

    def __post_init__(self):
        if self.min_players < 1:
            raise ValueError(f"min_players must be at least 1, got {self.min_players}")
        if self.max_players < self.min_players:
            raise ValueError(
                f"max_players ({self.max_players}) is below "
                f"min_players ({self.min_players})"
            )
        if self.rounds_total < 1:
            raise ValueError(f"rounds_total must be positive, got {self.rounds_total}")
        if self.turn_seconds < 1:
            raise ValueError(f"turn_seconds must be positive, got {self.turn_seconds}")

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "GameConfig":
        """Build a config from the ``game`` section of a config file.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(
                f"game settings must be a mapping, got {type(data).__name__}"
            )
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**known)


@dataclass(frozen=True)
class Player:
    """A player, identified by their seat in the roster."""
    index: int
    name: str

    def __str__(self) -> str:
        return self.name


class Outcome(Enum):
    """Who won the vote."""
    CREW_WINS = "crew"
    IMPOSTOR_WINS = "impostor"


def compute_outcome(accused_index: int, impostor_index: int) -> Outcome:
    """The crew wins only if they accused the impostor."""
    if accused_index == impostor_index:
        return Outcome.CREW_WINS
    return Outcome.IMPOSTOR_WINS


@dataclass(frozen=True)
class GameResult:
    """Everything the results screen reveals."""
    outcome: Outcome
    accused_index: int
    accused_name: str
    impostor_index: int
    impostor_name: str
    decoy_hint: str
    secret_word: str
    category: str

    @property
    def crew_won(self) -> bool:
        return self.outcome == Outcome.CREW_WINS


class GameSession:
    """One game of Impostor, from setup to results.

    Every operation checks the current phase before changing anything, so
    a rejected call leaves the session exactly as it was.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        word_bank: Optional[WordBank] = None,
        rng: Optional[random.Random] = None,
        roster: Sequence[str] = (),
        category_selection: Optional[str] = None,
        events: Optional[EventLog] = None,
    ):
        """Initialize a session in the setup phase.

        Args:
            config: Game configuration.
            word_bank: Source of categories and word pairs.
            rng: Random source for category, word and impostor selection.
            roster: Names to pre-fill the setup screen with.
            category_selection: Category to pre-select on the setup screen.
            events: Optional event log to record into.
        """
        self.config = config or GameConfig()
        self.word_bank = word_bank or DEFAULT_WORD_BANK
        self.rng = rng if rng is not None else random.Random()
        self.events = events if events is not None else EventLog()
        self.phase_manager = PhaseManager(rounds_total=self.config.rounds_total)
        self.timer = TurnTimer(duration=self.config.turn_seconds)

        # Setup screen seed
        self.roster: tuple[str, ...] = tuple(roster)
        self.category_selection = category_selection or self.config.default_category

        self.players: list[Player] = []
        self.selected_category: Optional[str] = None
        self._word_pair: Optional[WordPair] = None
        self._impostor_index: Optional[int] = None
        self.reveal: Optional[RevealSequencer] = None
        self.accused_index: Optional[int] = None
        self._result: Optional[GameResult] = None

        # Bumped on every turn change so stale clock ticks can be told apart
        self.turn_token = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def phase(self) -> GamePhase:
        return self.phase_manager.phase

    @property
    def phase_name(self) -> str:
        return self.phase_manager.state.phase_name

    @property
    def player_names(self) -> list[str]:
        return [p.name for p in self.players]

    @property
    def word_pair(self) -> Optional[WordPair]:
        return self._word_pair

    @property
    def round(self) -> int:
        """Current round, 1-based. Only meaningful while playing."""
        return self.phase_manager.state.round_number

    @property
    def turn_cursor(self) -> int:
        return self.phase_manager.state.current_turn_index

    @property
    def reveal_cursor(self) -> int:
        return self.reveal.cursor if self.reveal else 0

    @property
    def current_revealee(self) -> Player:
        """The player who should be holding the device during the reveal."""
        self.phase_manager.require("view the reveal", GamePhase.ASSIGNING)
        return self.players[self.reveal.cursor]

    @property
    def current_turn_player(self) -> Player:
        self.phase_manager.require("view the current turn", GamePhase.PLAYING)
        return self.players[self.turn_cursor]

    @property
    def result(self) -> Optional[GameResult]:
        return self._result

    def timer_state(self) -> TimerState:
        return self.timer.snapshot()

    def role_for(self, player_index: int) -> RoleCard:
        """Get the role card for one player."""
        self.phase_manager.require(
            "look up a role",
            GamePhase.ASSIGNING,
            GamePhase.PLAYING,
            GamePhase.VOTING,
            GamePhase.RESULTS,
        )
        return self.reveal.role_for(player_index)

    def role_for_current_revealee(self) -> RoleCard:
        self.phase_manager.require("view the reveal", GamePhase.ASSIGNING)
        return self.reveal.current_role()

    def is_impostor(self, player_index: int) -> bool:
        return self.role_for(player_index).is_impostor

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(
        self,
        names: Sequence[str],
        category_selection: Optional[str] = None,
    ) -> GamePhase:
        """Assign the word and the impostor, then begin the reveal.

        Args:
            names: Player names in seating order. Duplicates are allowed.
            category_selection: Category name or ``"Random"``.

        Returns:
            The new phase (ASSIGNING).

        Raises:
            IllegalPhaseTransition: If the game has already started.
            InsufficientPlayers: If the roster size or a name is invalid.
            InvalidCategory: If the category is unknown.
        """
        self.phase_manager.require("start the game", GamePhase.SETUP)

        cleaned = [str(n).strip() for n in names]
        count = len(cleaned)
        if not self.config.min_players <= count <= self.config.max_players:
            raise InsufficientPlayers(count, self.config.min_players, self.config.max_players)
        blanks = [i + 1 for i, n in enumerate(cleaned) if not n]
        if blanks:
            raise InsufficientPlayers(
                count,
                self.config.min_players,
                self.config.max_players,
                reason=f"Player name(s) at position {blanks} are blank",
            )

        selection = category_selection or self.category_selection
        category, pair = self.word_bank.resolve_category(selection, self.rng)
        impostor_index = self.rng.randrange(count)

        self.players = [Player(index=i, name=n) for i, n in enumerate(cleaned)]
        self.roster = tuple(cleaned)
        self.category_selection = selection
        self.selected_category = category
        self._word_pair = pair
        self._impostor_index = impostor_index
        self.reveal = RevealSequencer(
            player_count=count,
            impostor_index=impostor_index,
            word_pair=pair,
            category=category,
        )
        self.phase_manager.begin_reveal()

        self.events.record(
            "start",
            f"Game started with {count} players: {', '.join(cleaned)}. "
            f"Category: {category}.",
            self.phase_name,
        )
        return self.phase

    def advance_reveal(self) -> GamePhase:
        """The current player has seen their role; hand the device on.

        Returns:
            ASSIGNING while players remain, PLAYING after the last one.
        """
        self.phase_manager.require("advance the reveal", GamePhase.ASSIGNING)

        viewer = self.players[self.reveal.cursor]
        self.events.record(
            "reveal",
            f"{viewer.name} has seen their role.",
            self.phase_name,
            player=viewer.name,
        )

        if not self.reveal.advance():
            self.phase_manager.begin_turns()
            self._new_turn()
            self.events.record(
                "round",
                f"Round 1 of {self.config.rounds_total} begins.",
                self.phase_name,
            )
        return self.phase

    def start_turn_timer(self) -> bool:
        """Start the current player's countdown.

        Returns:
            True if the timer is running.
        """
        self.phase_manager.require("start the timer", GamePhase.PLAYING)
        return self.timer.start()

    def tick(self, token: Optional[int] = None) -> bool:
        """Apply one second of clock time to the current turn.

        Ticks that arrive outside the playing phase, after the turn they
        were meant for, or while the timer is stopped are ignored.

        Args:
            token: The ``turn_token`` the tick source was started on.

        Returns:
            True if the tick was applied.
        """
        if self.phase != GamePhase.PLAYING:
            return False
        if token is not None and token != self.turn_token:
            return False
        return self.timer.tick()

    def finish_turn(self) -> GamePhase:
        """End the current turn and move to the next player.

        Returns:
            PLAYING, or VOTING after the last turn of the last round.
        """
        self.phase_manager.require("finish a turn", GamePhase.PLAYING)

        player = self.players[self.turn_cursor]
        round_before = self.round
        self.events.record(
            "turn",
            f"{player.name} finished their turn "
            f"({self.timer.remaining_seconds}s left).",
            self.phase_name,
            player=player.name,
        )

        self.phase_manager.advance_turn(len(self.players))
        self._new_turn()

        if self.phase == GamePhase.VOTING:
            self.events.record(
                "voting",
                "All rounds complete. Time to vote!",
                self.phase_name,
            )
        elif self.round != round_before:
            self.events.record(
                "round",
                f"Round {self.round} of {self.config.rounds_total} begins.",
                self.phase_name,
            )
        return self.phase

    def emergency_vote(self) -> GamePhase:
        """Skip the remaining turns and go straight to voting."""
        self.phase_manager.require("call an emergency vote", GamePhase.PLAYING)

        round_number = self.round
        self.phase_manager.begin_voting()
        self._new_turn()
        self.events.record(
            "voting",
            f"Emergency vote called during round {round_number}.",
            self.phase_name,
        )
        return self.phase

    def cast_vote(self, accused_index: int) -> GameResult:
        """Accuse one player and reveal the outcome.

        Args:
            accused_index: Roster index of the accused player.

        Returns:
            The game result.

        Raises:
            IllegalPhaseTransition: If not in the voting phase.
            InvalidVoteTarget: If the index is outside the roster.
        """
        self.phase_manager.require("cast a vote", GamePhase.VOTING)
        if (
            isinstance(accused_index, bool)
            or not isinstance(accused_index, int)
            or not 0 <= accused_index < len(self.players)
        ):
            raise InvalidVoteTarget(accused_index, len(self.players))

        self.accused_index = accused_index
        outcome = compute_outcome(accused_index, self._impostor_index)
        self._result = GameResult(
            outcome=outcome,
            accused_index=accused_index,
            accused_name=self.players[accused_index].name,
            impostor_index=self._impostor_index,
            impostor_name=self.players[self._impostor_index].name,
            decoy_hint=self._word_pair.decoy_hint,
            secret_word=self._word_pair.secret_word,
            category=self.selected_category,
        )

        self.events.record(
            "vote",
            f"The group accused {self._result.accused_name}.",
            self.phase_name,
            player=self._result.accused_name,
        )
        # Kept out of the log until the vote is in
        self.events.record(
            "assignment",
            f"{self._result.impostor_name} is the impostor. "
            f"Secret word: {self._result.secret_word}. "
            f"Decoy hint: {self._result.decoy_hint}.",
            self.phase_name,
            Visibility.PRIVATE,
        )
        self.phase_manager.end_game()
        self.events.record(
            "result",
            ("Crew wins! " if self._result.crew_won else "Impostor wins! ")
            + f"The impostor was {self._result.impostor_name} "
            f"(hint: {self._result.decoy_hint}). "
            f"The secret word was {self._result.secret_word}.",
            self.phase_name,
        )
        return self._result

    def outcome(self) -> Outcome:
        self.phase_manager.require("view the outcome", GamePhase.RESULTS)
        return self._result.outcome

    def reset_keeping_roster(self) -> "GameSession":
        """Play again: a fresh session with the same names and category choice."""
        self.phase_manager.require("play again", GamePhase.RESULTS)
        return self._fresh(category_selection=self.category_selection)

    def reset_full(self) -> "GameSession":
        """Change players: a fresh session, names kept as a starting point."""
        self.phase_manager.require("change players", GamePhase.RESULTS)
        return self._fresh(category_selection=None)

    # ------------------------------------------------------------------

    def _new_turn(self) -> None:
        self.timer.reset()
        self.turn_token += 1

    def _fresh(self, category_selection: Optional[str]) -> "GameSession":
        return GameSession(
            config=self.config,
            word_bank=self.word_bank,
            rng=self.rng,
            roster=self.roster,
            category_selection=category_selection,
        )
