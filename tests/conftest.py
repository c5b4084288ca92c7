"""
Pytest configuration and shared fixtures for family lifecycle tests.

Testing Standards:
- Async tests carry pytest.mark.asyncio (auto mode is enabled in pyproject.toml)
- Use AsyncMock for remote collaborators in orchestrator tests
- Use FakeTimeAuthority for anything that reads the clock
- Unit tests go in tests/unit/, end-to-end flows in tests/integration/
"""

from datetime import datetime, timezone

import pytest

from family_lifecycle.application.services.family_dissolution_service import (
    FamilyDissolutionService,
)
from family_lifecycle.application.services.self_removal_service import (
    SelfRemovalService,
)
from family_lifecycle.domain.models.family import Family
from family_lifecycle.infrastructure.stubs.audit_log_stub import AuditLogStub
from family_lifecycle.infrastructure.stubs.family_repository_stub import (
    FamilyRepositoryStub,
)
from family_lifecycle.infrastructure.stubs.reauth_token_registry_stub import (
    ReauthTokenRegistryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

T0 = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from family_lifecycle import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at 2026-03-01T09:00Z."""
    return FakeTimeAuthority(frozen_at=T0)


@pytest.fixture
def family_repository() -> FamilyRepositoryStub:
    return FamilyRepositoryStub()


@pytest.fixture
def audit_log() -> AuditLogStub:
    return AuditLogStub()


@pytest.fixture
def reauth_tokens(fake_time_authority: FakeTimeAuthority) -> ReauthTokenRegistryStub:
    return ReauthTokenRegistryStub(time_authority=fake_time_authority, ttl_seconds=300)


@pytest.fixture
def shared_family(family_repository: FamilyRepositoryStub) -> Family:
    """Two-guardian family seeded in the repository."""
    family = Family(
        family_id="fam-1",
        guardian_ids=("guardian-a", "guardian-b"),
        child_ids=("child-1",),
    )
    family_repository.add_family(family)
    return family


@pytest.fixture
def solo_family(family_repository: FamilyRepositoryStub) -> Family:
    """Single-guardian family seeded in the repository."""
    family = Family(
        family_id="fam-solo",
        guardian_ids=("guardian-a",),
        child_ids=("child-1",),
    )
    family_repository.add_family(family)
    return family


@pytest.fixture
def dissolution_service(
    family_repository: FamilyRepositoryStub,
    audit_log: AuditLogStub,
    reauth_tokens: ReauthTokenRegistryStub,
    fake_time_authority: FakeTimeAuthority,
) -> FamilyDissolutionService:
    return FamilyDissolutionService(
        family_repository=family_repository,
        audit_log=audit_log,
        reauth_verifier=reauth_tokens,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def self_removal_service(
    family_repository: FamilyRepositoryStub,
    audit_log: AuditLogStub,
    reauth_tokens: ReauthTokenRegistryStub,
    fake_time_authority: FakeTimeAuthority,
) -> SelfRemovalService:
    return SelfRemovalService(
        family_repository=family_repository,
        audit_log=audit_log,
        reauth_verifier=reauth_tokens,
        time_authority=fake_time_authority,
    )
