"""Cancellable one-shot timers for highlight debouncing.

Any object with ``call_later(delay, callback)`` returning a handle with
``cancel()`` is a Scheduler; an asyncio event loop qualifies as-is, so a
store can run on the host's loop. ThreadingScheduler covers hosts without one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)


class Cancellable(Protocol):
    """Handle for a scheduled callback."""

    def cancel(self) -> None:
        """Prevent the callback from running if it has not started."""
        ...


class Scheduler(Protocol):
    """Schedules a callback after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        """Run callback once after delay seconds."""
        ...


class ThreadingScheduler:
    """Scheduler backed by daemon threading.Timer instances.

    Callbacks run on the timer thread; consumers must tolerate that.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
