"""Application services for the family lifecycle.

Client side:
- DissolutionOrchestrator / SelfRemovalOrchestrator: per-instance cached view,
  in-flight guard, timeout and error classification
- MutationGuard: single-flight guard for destructive calls

Backend side:
- FamilyDissolutionService: enforces the dissolution protocol
- SelfRemovalService: enforces guardian self-removal
"""

from family_lifecycle.application.services.dissolution_orchestrator import (
    DissolutionOrchestrator,
    DissolutionView,
)
from family_lifecycle.application.services.family_dissolution_service import (
    FamilyDissolutionService,
)
from family_lifecycle.application.services.mutation_guard import MutationGuard
from family_lifecycle.application.services.orchestrator_base import (
    OrchestratorState,
)
from family_lifecycle.application.services.self_removal_orchestrator import (
    SelfRemovalOrchestrator,
    SelfRemovalView,
)
from family_lifecycle.application.services.self_removal_service import (
    SelfRemovalService,
)
from family_lifecycle.application.services.time_authority_service import (
    TimeAuthorityService,
)

__all__: list[str] = [
    "DissolutionOrchestrator",
    "DissolutionView",
    "FamilyDissolutionService",
    "MutationGuard",
    "OrchestratorState",
    "SelfRemovalOrchestrator",
    "SelfRemovalView",
    "SelfRemovalService",
    "TimeAuthorityService",
]
