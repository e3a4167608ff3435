""" Per-request deadline shared by every upstream call. """
import time


class Deadline:
    """A point in time after which no further upstream work may start.

    Args:
        seconds: Budget in seconds, counted from construction.
        clock: Monotonic clock, replaceable in tests.
    """

    def __init__(self, seconds: float, clock=time.monotonic):
        self._clock = clock
        self.seconds = seconds
        self.expires_at = clock() + seconds

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining():.2f}s)"
