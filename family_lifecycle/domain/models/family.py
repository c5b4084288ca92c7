"""Family aggregate as stored by the lifecycle backend."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from family_lifecycle.domain.models.dissolution import DissolutionRecord


@dataclass(frozen=True, eq=True)
class Family:
    """A shared family account.

    Attributes:
        family_id: Unique family identifier.
        guardian_ids: Guardians with rights over the account.
        child_ids: Children monitored by the account.
        dissolution: Latest dissolution record, terminal or not.
    """

    family_id: str
    guardian_ids: tuple[str, ...]
    child_ids: tuple[str, ...] = field(default=())
    dissolution: DissolutionRecord | None = field(default=None)

    def __post_init__(self) -> None:
        if not self.family_id:
            raise ValueError("family_id is required")
        if len(self.guardian_ids) != len(set(self.guardian_ids)):
            raise ValueError("guardian_ids must be unique")

    def is_guardian(self, actor_id: str) -> bool:
        return actor_id in self.guardian_ids

    def co_guardians_of(self, actor_id: str) -> tuple[str, ...]:
        """Guardians other than ``actor_id``."""
        return tuple(g for g in self.guardian_ids if g != actor_id)

    @property
    def has_active_dissolution(self) -> bool:
        return self.dissolution is not None and not self.dissolution.is_terminal

    def with_dissolution(self, dissolution: DissolutionRecord) -> Family:
        return replace(self, dissolution=dissolution)

    def without_guardian(self, guardian_id: str) -> Family:
        return replace(
            self,
            guardian_ids=tuple(g for g in self.guardian_ids if g != guardian_id),
        )
