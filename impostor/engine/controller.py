"""Controller - the single entry point a user interface drives."""

import random
from typing import Optional, Sequence

from ..communication.events import EventLog
from .game import GameConfig, GameResult, GameSession, Outcome, Player
from .phases import GamePhase
from .roles import RoleCard
from .timer import TimerState
from .words import WordBank


class GameController:
    """Owns the one live game session and swaps it out between games.

    User interfaces should go through this class rather than holding on to
    a session, since "play again" and "change players" replace it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        word_bank: Optional[WordBank] = None,
        rng: Optional[random.Random] = None,
        roster: Sequence[str] = (),
    ):
        """Initialize the controller in the setup phase.

        Args:
            config: Game configuration.
            word_bank: Source of categories and word pairs.
            rng: Random source shared by every session.
            roster: Names to pre-fill the setup screen with.
        """
        self.config = config or GameConfig()
        self.word_bank = word_bank
        self.rng = rng if rng is not None else random.Random()
        self.session = GameSession(
            config=self.config,
            word_bank=word_bank,
            rng=self.rng,
            roster=roster,
        )
        self.games_played = 0

    @property
    def events(self) -> EventLog:
        return self.session.events

    @property
    def roster(self) -> tuple[str, ...]:
        """Names to show on the setup screen."""
        return self.session.roster

    @property
    def category_selection(self) -> str:
        return self.session.category_selection

    def categories(self) -> list[str]:
        """Category choices for the setup screen, Random first."""
        return self.session.word_bank.selectable_categories()

    def create_session(
        self,
        names: Sequence[str],
        category_selection: Optional[str] = None,
    ) -> GamePhase:
        """Start a game from the setup screen's name slots.

        Empty slots are skipped, so a setup screen can leave blank inputs
        around without the player count being affected.
        """
        filled = [n.strip() for n in names if n and n.strip()]
        return self.session.start(filled, category_selection)

    def current_phase(self) -> GamePhase:
        return self.session.phase

    def current_revealee(self) -> Player:
        return self.session.current_revealee

    def role_for_current_revealee(self) -> RoleCard:
        return self.session.role_for_current_revealee()

    def advance_reveal(self) -> GamePhase:
        return self.session.advance_reveal()

    def current_turn_player(self) -> Player:
        return self.session.current_turn_player

    def current_round(self) -> int:
        return self.session.round

    def timer_state(self) -> TimerState:
        return self.session.timer_state()

    def start_timer(self) -> bool:
        return self.session.start_turn_timer()

    def tick(self, token: Optional[int] = None) -> bool:
        return self.session.tick(token)

    def finish_turn(self) -> GamePhase:
        return self.session.finish_turn()

    def request_emergency_vote(self) -> GamePhase:
        return self.session.emergency_vote()

    def vote_candidates(self) -> list[Player]:
        return list(self.session.players)

    def cast_vote(self, index: int) -> GameResult:
        result = self.session.cast_vote(index)
        self.games_played += 1
        return result

    def outcome(self) -> Outcome:
        return self.session.outcome()

    def result(self) -> Optional[GameResult]:
        return self.session.result

    def reset_keeping_roster(self) -> GamePhase:
        """Back to setup with the same names and category."""
        self.session = self.session.reset_keeping_roster()
        return self.session.phase

    def reset_full(self) -> GamePhase:
        """Back to setup with the names kept but the category reset."""
        self.session = self.session.reset_full()
        return self.session.phase
