"""Time operations abstraction for testing.

This module provides an ABC for time operations (sleep and a monotonic clock)
to enable fast tests that don't actually sleep.
"""

from abc import ABC, abstractmethod


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Sleep for specified number of seconds.

        Args:
            seconds: Number of seconds to sleep
        """
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return the value of a clock that never goes backwards, in seconds."""
        ...
