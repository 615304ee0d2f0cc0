"""
Countdown to the release deadline.

time_remaining() is a pure read of the clock and the deadline.
CountdownTimer re-runs a callback once a second until it is stopped.
"""
import threading
from datetime import datetime, timezone
from typing import Callable, NamedTuple, Optional


class TimeRemaining(NamedTuple):
    """Whole days/hours/minutes/seconds left."""
    days: int
    hours: int
    minutes: int
    seconds: int


def time_remaining(target: datetime, now: Optional[datetime] = None) -> TimeRemaining:
    """
    Time left until the deadline.

    Args:
        target: Deadline (aware datetime)
        now: Current time (None = system clock, UTC)

    Returns:
        TimeRemaining, all zero once the deadline has passed
    """
    if now is None:
        now = datetime.now(timezone.utc)

    total_seconds = int((target - now).total_seconds())
    if total_seconds < 0:
        total_seconds = 0

    days, rest = divmod(total_seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    return TimeRemaining(days, hours, minutes, seconds)


def format_remaining(remaining: TimeRemaining) -> str:
    """
    Format as "Dd HH:MM:SS".

    Example:
        >>> format_remaining(TimeRemaining(3, 4, 5, 6))
        '3d 04:05:06'
    """
    return (f"{remaining.days}d {remaining.hours:02d}:"
            f"{remaining.minutes:02d}:{remaining.seconds:02d}")


class CountdownTimer:
    """
    Calls a function every `interval` seconds on a background thread.

    The owner must call stop() when it goes away. Once stop() returns the
    callback will not run again.
    """

    def __init__(self, callback: Callable[[], None], interval: float = 1.0):
        """
        Args:
            callback: Called with no arguments on every tick
            interval: Seconds between ticks
        """
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        self.callback = callback
        self.interval = interval
        self._stop_event = threading.Event()
        self._lock = threading.RLock()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        """Check if the timer thread is alive and not stopped."""
        return (self._thread is not None and self._thread.is_alive()
                and not self._stop_event.is_set())

    def start(self):
        """Start ticking (no-op if already running)."""
        with self._lock:
            if self.is_running:
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._run, args=(self._stop_event,), daemon=True
            )
            self._thread.start()

    def stop(self):
        """Stop ticking and wait for the thread to finish."""
        with self._lock:
            self._stop_event.set()
            thread = self._thread
            self._thread = None

        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout=max(1.0, self.interval * 2))

    def _run(self, stop_event: threading.Event):
        # wait() returns True once stopped
        while not stop_event.wait(self.interval):
            with self._lock:
                if stop_event.is_set():
                    break
                self.callback()
