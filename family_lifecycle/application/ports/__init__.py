"""Application ports - interfaces for external collaborators.

Available ports:
- DissolutionRemoteProtocol: remote dissolution operations
- SelfRemovalRemoteProtocol: remote self-removal operations
- FamilyRepositoryProtocol: family persistence with conditional writes
- AuditLogProtocol: append-only audit entries
- ReauthVerifierProtocol: single-use reauthentication tokens
- TimeAuthorityProtocol: clock
"""

from family_lifecycle.application.ports.audit_log import AuditLogProtocol
from family_lifecycle.application.ports.dissolution_remote import (
    DissolutionRemoteProtocol,
)
from family_lifecycle.application.ports.family_repository import (
    FamilyRepositoryProtocol,
)
from family_lifecycle.application.ports.reauth_verifier import ReauthVerifierProtocol
from family_lifecycle.application.ports.self_removal_remote import (
    SelfRemovalRemoteProtocol,
)
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol

__all__: list[str] = [
    "AuditLogProtocol",
    "DissolutionRemoteProtocol",
    "FamilyRepositoryProtocol",
    "ReauthVerifierProtocol",
    "SelfRemovalRemoteProtocol",
    "TimeAuthorityProtocol",
]
