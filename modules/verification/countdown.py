"""
Countdown timer for OTP expiry.

One asyncio task per timer decrements the remaining seconds once per
interval until it reaches 0, then signals expiry exactly once. The task
must be cancelled when the owning view goes away; reset() cancels the
running task before starting a fresh one, so two tickers never race.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 600

TickCallback = Callable[[int], None]
ExpireCallback = Callable[[], None]


def format_remaining(seconds: int) -> str:
    """Format seconds as m:ss, e.g. 605 -> "10:05"."""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


class CountdownTimer:
    """
    Whole-second countdown driven by an asyncio task.

    No drift correction: each step is one sleep of `interval` seconds.
    tick() performs a single step synchronously, which lets callers (and
    tests) drive the countdown without waiting on the clock.
    """

    def __init__(
        self,
        duration: int = DEFAULT_DURATION_SECONDS,
        interval: float = 1.0,
        on_tick: Optional[TickCallback] = None,
        on_expire: Optional[ExpireCallback] = None,
    ):
        """
        Initialize the timer. It does not run until start() is called.

        Args:
            duration: Starting number of seconds.
            interval: Real time between ticks, in seconds.
            on_tick: Called with the new remaining value after each tick.
            on_expire: Called once, from the tick that reaches 0.
        """
        if duration < 0:
            raise ValueError("duration must be >= 0")
        if interval <= 0:
            raise ValueError("interval must be > 0")

        self._duration = duration
        self._interval = interval
        self._remaining = duration
        self._expired = duration == 0
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._task: Optional[asyncio.Task] = None

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """
        Start ticking on the running event loop.

        No-op if already running or already at 0.
        """
        if self.running or self._remaining <= 0:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def _run(self) -> None:
        try:
            while self._remaining > 0:
                await asyncio.sleep(self._interval)
                self.tick()
        except Exception as e:
            logger.exception(f"Countdown stopped at {self._remaining}s: {e}")
            raise

    def tick(self) -> int:
        """
        Advance the countdown by one second.

        Returns:
            Remaining seconds after the step
        """
        if self._remaining <= 0:
            return 0

        self._remaining -= 1
        if self._on_tick is not None:
            self._on_tick(self._remaining)

        if self._remaining == 0 and not self._expired:
            self._expired = True
            logger.debug("Countdown expired")
            if self._on_expire is not None:
                self._on_expire()

        return self._remaining

    def cancel(self) -> None:
        """Stop ticking. The remaining value is kept."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def reset(self, duration: Optional[int] = None, start: bool = True) -> None:
        """
        Cancel any in-flight tick and begin a fresh countdown.

        Args:
            duration: New starting value. Defaults to the original duration.
            start: Whether to start ticking immediately.
        """
        self.cancel()
        self._remaining = duration if duration is not None else self._duration
        self._expired = self._remaining == 0
        if start:
            self.start()
