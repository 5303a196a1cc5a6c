"""Errors raised when a game rule is violated."""

from typing import Iterable


class GameError(ValueError):
    """Base class for rejected game operations.

    A rejected operation never changes session state, so the caller can
    simply report the message and ask again.
    """


class InsufficientPlayers(GameError):
    """Roster is too small, too large, or contains a blank name."""

    def __init__(self, count: int, min_players: int, max_players: int, reason: str = ""):
        self.count = count
        self.min_players = min_players
        self.max_players = max_players
        message = reason or (
            f"Need between {min_players} and {max_players} players, got {count}"
        )
        super().__init__(message)


class InvalidCategory(GameError):
    """Category name is not in the word bank."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = list(available)
        message = f"Unknown category: {name}."
        if self.available:
            message += f" Available: {self.available}"
        super().__init__(message)


class IllegalPhaseTransition(GameError):
    """Operation is not allowed in the current phase."""

    def __init__(self, operation: str, phase, allowed=()):
        self.operation = operation
        self.phase = phase
        self.allowed = tuple(allowed)
        expected = ", ".join(p.name for p in self.allowed)
        super().__init__(
            f"Cannot {operation} during {phase.name}"
            + (f" (allowed in: {expected})" if expected else "")
        )


class InvalidVoteTarget(GameError):
    """Accused index is outside the roster."""

    def __init__(self, index: int, player_count: int):
        self.index = index
        self.player_count = player_count
        super().__init__(
            f"Vote target {index} is out of range (0-{player_count - 1})"
        )
