"""In-memory record of what happened during a game."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Visibility(Enum):
    """Who may see an event."""
    PUBLIC = "public"  # Safe to show everyone at the table
    PRIVATE = "private"  # Gives away the impostor or the word


@dataclass
class GameEvent:
    """A single thing that happened in a game."""
    kind: str  # e.g. "start", "reveal", "turn", "vote", "result"
    content: str
    phase: str
    visibility: Visibility = Visibility.PUBLIC
    player: Optional[str] = None


@dataclass
class EventLog:
    """Ordered list of game events."""

    events: list[GameEvent] = field(default_factory=list)

    def record(
        self,
        kind: str,
        content: str,
        phase: str,
        visibility: Visibility = Visibility.PUBLIC,
        player: Optional[str] = None,
    ) -> GameEvent:
        """Append an event to the log."""
        event = GameEvent(
            kind=kind,
            content=content,
            phase=phase,
            visibility=visibility,
            player=player,
        )
        self.events.append(event)
        return event

    def get_events(self, phase: Optional[str] = None) -> list[GameEvent]:
        """Get events, optionally filtered by phase."""
        if phase is None:
            return list(self.events)
        return [e for e in self.events if e.phase == phase]

    def public_events(self) -> list[GameEvent]:
        """Get events that do not give away any secret."""
        return [e for e in self.events if e.visibility == Visibility.PUBLIC]

    def phases(self) -> list[str]:
        """Get phase names in the order they first appeared."""
        seen: list[str] = []
        for e in self.events:
            if e.phase not in seen:
                seen.append(e.phase)
        return seen

    def __len__(self) -> int:
        return len(self.events)

    def clear(self) -> None:
        self.events.clear()
