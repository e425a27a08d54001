from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.base import utc_now


class Clock(ABC):
    """Time source - enables deterministic testing."""

    @abstractmethod
    def now(self) -> datetime:
        """Current naive UTC time."""
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return utc_now()
