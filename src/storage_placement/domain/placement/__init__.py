"""Placement domain model."""

from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.policy import (
    DEFAULT_MAX_ATTEMPTS,
    PlacementDecision,
    decide_placement,
    find_duplicate_assignments,
)
from storage_placement.domain.placement.value_objects import (
    AccessTier,
    AccountHandle,
    AccountKind,
    AccountScope,
    AccountSpec,
    ClusterAssignment,
    PlacedAccount,
    ResourceGroup,
    ScopeKind,
    SkuName,
)

__all__: list[str] = [
    "DEFAULT_MAX_ATTEMPTS",
    "AccessTier",
    "AccountHandle",
    "AccountKind",
    "AccountScope",
    "AccountSpec",
    "ClusterAssignment",
    "ExclusionSet",
    "PlacedAccount",
    "PlacementDecision",
    "ResourceGroup",
    "ScopeKind",
    "SkuName",
    "decide_placement",
    "find_duplicate_assignments",
]
