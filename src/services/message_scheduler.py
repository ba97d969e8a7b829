"""
Message Scheduler - Delayed callbacks for transient UI messages

The view only needs "run this later, unless cancelled". The application
uses daemon threading timers; tests substitute a simulated clock.
"""

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...


class ThreadingScheduler:
    """Scheduler backed by daemon threading.Timer instances"""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        logger.debug(f"Scheduled callback in {delay:.3f}s")
        return timer


