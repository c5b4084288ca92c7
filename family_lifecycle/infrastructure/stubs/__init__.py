"""In-memory stub implementations of the lifecycle ports.

For development and tests. Not for production use.
"""

from family_lifecycle.infrastructure.stubs.audit_log_stub import AuditLogStub
from family_lifecycle.infrastructure.stubs.family_repository_stub import (
    FamilyRepositoryStub,
)
from family_lifecycle.infrastructure.stubs.reauth_token_registry_stub import (
    ReauthTokenRegistryStub,
)

__all__: list[str] = [
    "AuditLogStub",
    "FamilyRepositoryStub",
    "ReauthTokenRegistryStub",
]
