"""Game phase definitions and transitions."""

from enum import Enum, auto
from dataclasses import dataclass

from .errors import IllegalPhaseTransition


class GamePhase(Enum):
    """Phases of an impostor game."""
    SETUP = auto()      # Entering names, choosing a category
    ASSIGNING = auto()  # Passing the device so each player sees their role
    PLAYING = auto()    # Timed turns describing the word
    VOTING = auto()     # Group accuses one player
    RESULTS = auto()    # Impostor and word revealed


@dataclass
class PhaseState:
    """Current state within a phase."""
    phase: GamePhase
    round_number: int = 0  # 1..rounds_total while PLAYING
    current_turn_index: int = 0  # Whose turn to describe

    @property
    def phase_name(self) -> str:
        """Get a human-readable phase name with round number."""
        if self.phase == GamePhase.PLAYING:
            return f"round_{self.round_number}"
        return self.phase.name.lower()


class PhaseManager:
    """Manages phase transitions and the round/turn counters."""

    def __init__(self, rounds_total: int = 3):
        """Initialize the phase manager.

        Args:
            rounds_total: Number of full turn rotations before voting.
        """
        self.rounds_total = rounds_total
        self.state = PhaseState(phase=GamePhase.SETUP)

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def require(self, operation: str, *allowed: GamePhase) -> None:
        """Reject an operation that is not valid in the current phase.

        Raises:
            IllegalPhaseTransition: If the current phase is not in ``allowed``.
        """
        if self.state.phase not in allowed:
            raise IllegalPhaseTransition(operation, self.state.phase, allowed)

    def begin_reveal(self) -> PhaseState:
        """Setup -> Assigning."""
        self.state = PhaseState(phase=GamePhase.ASSIGNING)
        return self.state

    def begin_turns(self) -> PhaseState:
        """Assigning -> Playing, first player of round one."""
        self.state = PhaseState(
            phase=GamePhase.PLAYING,
            round_number=1,
            current_turn_index=0,
        )
        return self.state

    def advance_turn(self, num_players: int) -> PhaseState:
        """Advance to the next player's turn.

        Args:
            num_players: Total number of players.

        Returns:
            The new phase state. Moves to voting after the last turn of the
            last round.
        """
        next_index = (self.state.current_turn_index + 1) % num_players

        if next_index == 0:
            # Round complete
            if self.state.round_number < self.rounds_total:
                self.state = PhaseState(
                    phase=GamePhase.PLAYING,
                    round_number=self.state.round_number + 1,
                    current_turn_index=0,
                )
            else:
                self.begin_voting()
        else:
            self.state.current_turn_index = next_index

        return self.state

    def begin_voting(self) -> PhaseState:
        """Playing -> Voting, discarding any remaining turns."""
        self.state = PhaseState(
            phase=GamePhase.VOTING,
            round_number=self.state.round_number,
        )
        return self.state

    def end_game(self) -> PhaseState:
        """Voting -> Results."""
        self.state = PhaseState(
            phase=GamePhase.RESULTS,
            round_number=self.state.round_number,
        )
        return self.state
