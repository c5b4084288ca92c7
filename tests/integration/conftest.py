"""Fixtures for end-to-end lifecycle flows.

Each orchestrator fixture is a separate client instance (its own guard)
talking to the same in-memory backend.
"""

import pytest

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
from tests.helpers.fake_time_authority import FakeTimeAuthority


@pytest.fixture
def guardian_a_client(
    dissolution_service: FamilyDissolutionService,
    fake_time_authority: FakeTimeAuthority,
) -> DissolutionOrchestrator:
    return DissolutionOrchestrator(
        remote=dissolution_service, time_authority=fake_time_authority
    )


@pytest.fixture
def guardian_b_client(
    dissolution_service: FamilyDissolutionService,
    fake_time_authority: FakeTimeAuthority,
) -> DissolutionOrchestrator:
    return DissolutionOrchestrator(
        remote=dissolution_service, time_authority=fake_time_authority
    )


@pytest.fixture
def removal_client(
    self_removal_service: SelfRemovalService,
    fake_time_authority: FakeTimeAuthority,
) -> SelfRemovalOrchestrator:
    return SelfRemovalOrchestrator(
        remote=self_removal_service, time_authority=fake_time_authority
    )
