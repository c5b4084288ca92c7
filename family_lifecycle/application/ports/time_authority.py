"""Clock port.

Cooling-period deadlines, days remaining and reauth token expiry are all
computed from this port rather than ``datetime.now()``. Production wires
``TimeAuthorityService``; tests wire ``tests.helpers.FakeTimeAuthority``.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Source of wall-clock and monotonic time."""

    @abstractmethod
    def now(self) -> datetime:
        """Current UTC time (timezone-aware)."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Seconds on a clock that never goes backwards. Compare, don't display."""
        ...
