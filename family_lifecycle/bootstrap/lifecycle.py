"""Bootstrap wiring for dissolution and self-removal dependencies.

Backend collaborators are process-wide singletons. Orchestrators are created
per client instance: each one owns its own in-flight guard, so two
orchestrators over the same backend model two devices racing.
"""

from __future__ import annotations

from family_lifecycle.application.ports.audit_log import AuditLogProtocol
from family_lifecycle.application.ports.family_repository import (
    FamilyRepositoryProtocol,
)
from family_lifecycle.application.ports.reauth_verifier import ReauthVerifierProtocol
from family_lifecycle.application.ports.time_authority import TimeAuthorityProtocol
from family_lifecycle.application.services.dissolution_orchestrator import (
    DissolutionOrchestrator,
)
from family_lifecycle.application.services.family_dissolution_service import (
    FamilyDissolutionService,
)
from family_lifecycle.application.services.self_removal_orchestrator import (
    SelfRemovalOrchestrator,
)
from family_lifecycle.application.services.self_removal_service import (
    SelfRemovalService,
)
from family_lifecycle.application.services.time_authority_service import (
    TimeAuthorityService,
)
from family_lifecycle.config.lifecycle_config import LifecycleConfig
from family_lifecycle.infrastructure.stubs.audit_log_stub import AuditLogStub
from family_lifecycle.infrastructure.stubs.family_repository_stub import (
    FamilyRepositoryStub,
)
from family_lifecycle.infrastructure.stubs.reauth_token_registry_stub import (
    ReauthTokenRegistryStub,
)

_config: LifecycleConfig | None = None
_time_authority: TimeAuthorityProtocol | None = None
_family_repository: FamilyRepositoryProtocol | None = None
_audit_log: AuditLogProtocol | None = None
_reauth_verifier: ReauthVerifierProtocol | None = None
_dissolution_service: FamilyDissolutionService | None = None
_self_removal_service: SelfRemovalService | None = None


def get_lifecycle_config() -> LifecycleConfig:
    """Get lifecycle configuration, read from the environment on first use."""
    global _config
    if _config is None:
        _config = LifecycleConfig.from_environment()
    return _config


def get_time_authority() -> TimeAuthorityProtocol:
    """Get the shared clock."""
    global _time_authority
    if _time_authority is None:
        _time_authority = TimeAuthorityService()
    return _time_authority


def get_family_repository() -> FamilyRepositoryProtocol:
    """Get family repository instance."""
    global _family_repository
    if _family_repository is None:
        _family_repository = FamilyRepositoryStub()
    return _family_repository


def get_audit_log() -> AuditLogProtocol:
    """Get audit log instance."""
    global _audit_log
    if _audit_log is None:
        _audit_log = AuditLogStub()
    return _audit_log


def get_reauth_verifier() -> ReauthVerifierProtocol:
    """Get reauth token verifier instance."""
    global _reauth_verifier
    if _reauth_verifier is None:
        _reauth_verifier = ReauthTokenRegistryStub(
            time_authority=get_time_authority(),
            ttl_seconds=get_lifecycle_config().reauth_token_ttl_seconds,
        )
    return _reauth_verifier


def get_dissolution_service() -> FamilyDissolutionService:
    """Get the backend dissolution service."""
    global _dissolution_service
    if _dissolution_service is None:
        _dissolution_service = FamilyDissolutionService(
            family_repository=get_family_repository(),
            audit_log=get_audit_log(),
            reauth_verifier=get_reauth_verifier(),
            time_authority=get_time_authority(),
            config=get_lifecycle_config(),
        )
    return _dissolution_service


def get_self_removal_service() -> SelfRemovalService:
    """Get the backend self-removal service."""
    global _self_removal_service
    if _self_removal_service is None:
        _self_removal_service = SelfRemovalService(
            family_repository=get_family_repository(),
            audit_log=get_audit_log(),
            reauth_verifier=get_reauth_verifier(),
            time_authority=get_time_authority(),
            config=get_lifecycle_config(),
        )
    return _self_removal_service


def create_dissolution_orchestrator() -> DissolutionOrchestrator:
    """Create a dissolution orchestrator for one client instance."""
    return DissolutionOrchestrator(
        remote=get_dissolution_service(),
        time_authority=get_time_authority(),
        config=get_lifecycle_config(),
    )


def create_self_removal_orchestrator() -> SelfRemovalOrchestrator:
    """Create a self-removal orchestrator for one client instance."""
    return SelfRemovalOrchestrator(
        remote=get_self_removal_service(),
        time_authority=get_time_authority(),
        config=get_lifecycle_config(),
    )


def reset_lifecycle_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _config
    global _time_authority
    global _family_repository
    global _audit_log
    global _reauth_verifier
    global _dissolution_service
    global _self_removal_service

    _config = None
    _time_authority = None
    _family_repository = None
    _audit_log = None
    _reauth_verifier = None
    _dissolution_service = None
    _self_removal_service = None


def set_lifecycle_config(config: LifecycleConfig) -> None:
    """Set custom lifecycle configuration."""
    global _config
    _config = config


def set_time_authority(time_authority: TimeAuthorityProtocol) -> None:
    """Set custom clock for testing."""
    global _time_authority
    _time_authority = time_authority


def set_family_repository(repo: FamilyRepositoryProtocol) -> None:
    """Set custom family repository (for production use)."""
    global _family_repository
    _family_repository = repo


def set_audit_log(audit_log: AuditLogProtocol) -> None:
    """Set custom audit log (for production use)."""
    global _audit_log
    _audit_log = audit_log


def set_reauth_verifier(verifier: ReauthVerifierProtocol) -> None:
    """Set custom reauth verifier (for production use)."""
    global _reauth_verifier
    _reauth_verifier = verifier
