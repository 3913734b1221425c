"""Time Authority Protocol - interface for consistent timestamp provisioning.

This port defines the contract for obtaining timestamps throughout the
review services. Services inject a TimeAuthorityProtocol implementation
instead of calling datetime.now() directly, so submission, decision and
statistics timestamps are deterministic under test.

For production:
    Use SystemTimeAuthority from src/infrastructure/adapters/time/

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority."""

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness (UTC recommended)."""
        ...

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return current UTC time as a timezone-aware datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return monotonic clock value for measuring elapsed time.

        Returns:
            Monotonically increasing float value (in seconds).
        """
        ...
