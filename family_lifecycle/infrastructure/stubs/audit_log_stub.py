"""In-memory stub for AuditLogProtocol."""

from __future__ import annotations

from family_lifecycle.application.ports.audit_log import AuditLogProtocol
from family_lifecycle.domain.models.audit_entry import AuditEntry


class AuditLogStub(AuditLogProtocol):
    """Append-only in-memory audit log.

    ``entries`` exposes everything, sealed entries included, for assertions.
    """

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    @property
    def entries(self) -> tuple[AuditEntry, ...]:
        return tuple(self._entries)

    async def append(self, entry: AuditEntry) -> None:
        self._entries.append(entry)

    async def list_for_family(
        self,
        family_id: str,
        include_sealed: bool = False,
    ) -> list[AuditEntry]:
        return [
            entry
            for entry in self._entries
            if entry.family_id == family_id and (include_sealed or not entry.is_sealed)
        ]

    def clear(self) -> None:
        self._entries.clear()
