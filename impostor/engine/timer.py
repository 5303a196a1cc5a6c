"""Turn countdown and the clock that drives it."""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .game import GameSession

TURN_TIME_SEC = 20


@dataclass(frozen=True)
class TimerState:
    """Snapshot of the turn timer for display."""
    remaining_seconds: int
    running: bool
    duration: int

    @property
    def can_start(self) -> bool:
        """True on a fresh turn, when the start action should be offered."""
        return not self.running and self.remaining_seconds == self.duration

    @property
    def expired(self) -> bool:
        return self.remaining_seconds == 0


class TurnTimer:
    """Countdown for a single player's turn.

    The timer knows nothing about wall-clock time; something else calls
    ``tick()`` once per second while it is running.
    """

    def __init__(self, duration: int = TURN_TIME_SEC):
        self.duration = duration
        self.remaining_seconds = duration
        self.running = False

    def start(self) -> bool:
        """Start counting down. Does nothing once the time is used up.

        Returns:
            True if the timer is now running.
        """
        if self.remaining_seconds > 0:
            self.running = True
        return self.running

    def stop(self) -> None:
        self.running = False

    def tick(self) -> bool:
        """Count down one second.

        Returns:
            True if the tick changed the remaining time.
        """
        if not self.running or self.remaining_seconds <= 0:
            return False
        self.remaining_seconds -= 1
        if self.remaining_seconds == 0:
            self.running = False
        return True

    def reset(self) -> None:
        """Back to the full duration, stopped."""
        self.remaining_seconds = self.duration
        self.running = False

    @property
    def can_start(self) -> bool:
        return self.snapshot().can_start

    def snapshot(self) -> TimerState:
        return TimerState(
            remaining_seconds=self.remaining_seconds,
            running=self.running,
            duration=self.duration,
        )


class TickClock:
    """Drives a session's turn timer with one tick per interval.

    A clock is bound to the turn it was started on. Once that turn ends,
    the timer stops, or the session leaves the playing phase, the clock
    exits without touching the session again.
    """

    def __init__(
        self,
        session: "GameSession",
        interval: float = 1.0,
        on_tick: Optional[Callable[[int], None]] = None,
        on_expire: Optional[Callable[[], None]] = None,
    ):
        """Initialize the clock.

        Args:
            session: Session whose timer should be driven.
            interval: Seconds between ticks.
            on_tick: Called with the remaining seconds after each applied tick.
            on_expire: Called once if the countdown reaches zero.
        """
        self.session = session
        self.interval = interval
        self.on_tick = on_tick
        self.on_expire = on_expire
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the tick loop on the running event loop."""
        self.stop()
        self._task = asyncio.get_running_loop().create_task(
            self._run(self.session.turn_token)
        )
        return self._task

    def stop(self) -> None:
        """Cancel the tick loop. Pending ticks are dropped."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the tick loop to finish on its own."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _run(self, token: int) -> None:
        while self.session.timer.running:
            await asyncio.sleep(self.interval)
            if not self.session.tick(token):
                return
            remaining = self.session.timer.remaining_seconds
            if self.on_tick:
                self.on_tick(remaining)
            if remaining == 0:
                if self.on_expire:
                    self.on_expire()
                return
