"""
Clock collaborators for the Minesweeper engine.

The engine never schedules anything itself: it signals a Clock to start
on the first move and to stop on game end or reset, and the Clock calls
back into the engine once per elapsed time unit.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


# ============================================================================
# Clock Interface
# ============================================================================

class Clock(ABC):
    """
    Abstract source of periodic ticks.

    Subclasses decide how ticks are scheduled. start() and stop() are
    only ever issued by the engine; a clock never starts on its own.
    """

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None
        self._running = False

    def bind(self, callback: TickCallback) -> None:
        """Set the function to call on every tick."""
        self._callback = callback

    @property
    def running(self) -> bool:
        """Whether ticks are currently being delivered."""
        return self._running

    @abstractmethod
    def start(self) -> None:
        """Begin delivering ticks."""

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering ticks immediately."""


class NullClock(Clock):
    """Clock that tracks start/stop but never ticks."""

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False


# ============================================================================
# Manual Clock
# ============================================================================

class ManualClock(Clock):
    """
    Deterministic clock driven by explicit advance() calls.

    Useful for tests and headless drivers that want to control time.
    """

    def __init__(self) -> None:
        super().__init__()
        self.start_count = 0
        self.stop_count = 0

    def start(self) -> None:
        self._running = True
        self.start_count += 1

    def stop(self) -> None:
        self._running = False
        self.stop_count += 1

    def advance(self, ticks: int = 1) -> int:
        """
        Deliver up to `ticks` ticks, stopping early if the clock stops.

        Returns:
            Number of ticks actually delivered.
        """
        delivered = 0
        for _ in range(ticks):
            if not self._running or self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


# ============================================================================
# Threaded Clock
# ============================================================================

class ThreadedClock(Clock):
    """
    Wall-clock ticks delivered from a chain of threading.Timer objects.

    Every start() begins a new generation; a timer belonging to an older
    generation does nothing when it fires, so stop() takes effect at once
    even if a timer is already in flight.
    """

    def __init__(self, interval: float = 1.0) -> None:
        """
        Initialize the clock.

        Args:
            interval: Seconds between ticks.
        """
        super().__init__()
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0

    def start(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._running = True
            self._schedule(self._generation)
        logger.debug("Clock started (interval=%.2fs)", self.interval)

    def stop(self) -> None:
        with self._lock:
            was_running = self._running
            self._cancel_timer()
            self._generation += 1
            self._running = False
        if was_running:
            logger.debug("Clock stopped")

    def _schedule(self, generation: int) -> None:
        """Arm the next timer; caller must hold the lock."""
        timer = threading.Timer(self.interval, self._fire, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_timer(self) -> None:
        """Cancel any pending timer; caller must hold the lock."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or not self._running:
                return
            self._schedule(generation)
            callback = self._callback

        # Called outside the lock: the callback may stop this clock.
        if callback is not None:
            callback()
