"""Application services."""

from storage_placement.application.services.account_placement_service import (
    AccountPlacementService,
)
from storage_placement.application.services.cluster_resolution_service import (
    ClusterResolutionService,
)
from storage_placement.application.services.fleet_placement_service import FleetPlacementService
from storage_placement.application.services.name_allocation_service import (
    NameAllocationService,
)
from storage_placement.application.services.reconciliation_service import ReconciliationService

__all__: list[str] = [
    "AccountPlacementService",
    "ClusterResolutionService",
    "FleetPlacementService",
    "NameAllocationService",
    "ReconciliationService",
]
