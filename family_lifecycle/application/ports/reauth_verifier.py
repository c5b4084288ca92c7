"""Reauthentication token verifier port.

The credential-refresh flow is a black box that hands the caller a token
string. The backend only needs to check that a token was issued to the
actor, has not expired, and has not been used before.
"""

from __future__ import annotations

from typing import Protocol


class ReauthVerifierProtocol(Protocol):
    """Port for consuming single-use reauthentication tokens."""

    async def consume(self, actor_id: str, token: str) -> None:
        """Verify and consume a token.

        Raises:
            ReauthTokenRequiredError: Token missing or not issued to this actor.
            ReauthTokenExpiredError: Token expired or already used.
        """
        ...
