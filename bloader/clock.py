"""Clocks: the real wall clock and a settable fake one."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Source of the current time."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time."""


class RealClock(Clock):
    """Clock that reads the system time."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


_DEFAULT_CLOCK = RealClock()


def default_clock() -> Clock:
    """Return the shared real clock."""
    return _DEFAULT_CLOCK


class FakeClock(Clock):
    """Clock that always reports a fixed moment until it is changed."""

    def __init__(self, moment: datetime) -> None:
        self._lock = threading.Lock()
        self._now = moment

    def now(self) -> datetime:
        with self._lock:
            return self._now

    def set_time(self, moment: datetime) -> None:
        """Change the moment the clock reports."""
        with self._lock:
            self._now = moment