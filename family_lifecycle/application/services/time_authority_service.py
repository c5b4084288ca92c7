"""System clock implementation of TimeAuthorityProtocol."""

import time
from datetime import datetime, timezone

from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol


class TimeAuthorityService(TimeAuthorityProtocol):
    """Reads the host clock.

    Example:
        >>> clock = TimeAuthorityService()
        >>> clock.now().tzinfo is timezone.utc
        True
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
