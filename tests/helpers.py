"""Shared builders for the test suite."""

from typing import Optional, Sequence

from impostor.engine.game import GameConfig, GameSession
from impostor.engine.phases import GamePhase


class ScriptedRandom:
    """Random source that returns pre-set values from ``randrange``."""

    def __init__(self, *values: int):
        self.values = list(values)
        self.calls: list[int] = []

    def randrange(self, n: int) -> int:
        self.calls.append(n)
        value = self.values.pop(0) if self.values else 0
        assert 0 <= value < n, f"scripted value {value} outside range({n})"
        return value


def names_of(n: int) -> list[str]:
    return [f"P{i}" for i in range(n)]


def make_session(
    names: Sequence[str] = ("Ana", "Ben", "Cy"),
    category: str = "Animals",
    rng=None,
    config: Optional[GameConfig] = None,
) -> GameSession:
    """Create a session that has already started (ASSIGNING)."""
    session = GameSession(config=config, rng=rng if rng is not None else ScriptedRandom(0, 1))
    session.start(list(names), category)
    return session


def reveal_all(session: GameSession) -> GameSession:
    """Walk every player through the reveal (ASSIGNING -> PLAYING)."""
    while session.phase == GamePhase.ASSIGNING:
        session.advance_reveal()
    return session


def play_to_voting(session: GameSession) -> GameSession:
    """Finish every turn of every round (PLAYING -> VOTING)."""
    while session.phase == GamePhase.PLAYING:
        session.finish_turn()
    return session
