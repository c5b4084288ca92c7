"""Audit log port. Append-only."""

from __future__ import annotations

from typing import Protocol

from family_lifecycle.domain.models.audit_entry import AuditEntry


class AuditLogProtocol(Protocol):
    """Port for lifecycle audit entries."""

    async def append(self, entry: AuditEntry) -> None:
        """Append an entry. Entries are never modified or deleted."""
        ...

    async def list_for_family(
        self,
        family_id: str,
        include_sealed: bool = False,
    ) -> list[AuditEntry]:
        """List a family's entries in append order.

        Args:
            family_id: The family.
            include_sealed: Include sealed entries (legal review only).
        """
        ...
