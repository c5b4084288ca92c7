"""In-memory stub for ReauthVerifierProtocol.

Stands in for the credential-refresh flow. ``issue`` plays the part of a
successful re-authentication; ``consume`` is what the backend calls before a
destructive operation. Tokens are single-use and expire after the configured
TTL.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta

from family_lifecycle.application.ports.reauth_verifier import ReauthVerifierProtocol
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.time_authority_service import (
    TimeAuthorityService,
)
from family_lifecycle.config.lifecycle_config import DEFAULT_LIFECYCLE_CONFIG
from family_lifecycle.domain.errors.lifecycle import (
    ReauthTokenExpiredError,
    ReauthTokenRequiredError,
)


@dataclass
class IssuedToken:
    """A token handed out after re-authentication."""

    actor_id: str
    expires_at: datetime
    used: bool = False


class ReauthTokenRegistryStub(ReauthVerifierProtocol):
    """Issues and verifies single-use reauth tokens in memory."""

    def __init__(
        self,
        time_authority: TimeAuthorityProtocol | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        self._time = time_authority or TimeAuthorityService()
        self._ttl = timedelta(
            seconds=(
                ttl_seconds
                if ttl_seconds is not None
                else DEFAULT_LIFECYCLE_CONFIG.reauth_token_ttl_seconds
            )
        )
        self._tokens: dict[str, IssuedToken] = {}

    def issue(self, actor_id: str) -> str:
        """Issue a fresh token for ``actor_id`` (simulated re-authentication)."""
        token = secrets.token_urlsafe(24)
        self._tokens[token] = IssuedToken(
            actor_id=actor_id,
            expires_at=self._time.now() + self._ttl,
        )
        return token

    async def consume(self, actor_id: str, token: str) -> None:
        issued = self._tokens.get(token) if token else None
        if issued is None or issued.actor_id != actor_id:
            raise ReauthTokenRequiredError()
        if issued.used or self._time.now() >= issued.expires_at:
            raise ReauthTokenExpiredError()
        issued.used = True
