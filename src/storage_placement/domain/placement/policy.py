"""Pure placement decisions.

Nothing here talks to a provider; the application services perform the
create, delete and log side effects around these decisions.
"""

from collections import defaultdict
from collections.abc import Iterable
from enum import Enum

from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.value_objects import (
    ClusterAssignment,
    normalize_cluster_id,
)

DEFAULT_MAX_ATTEMPTS = 3


class PlacementDecision(str, Enum):
    """Outcome of one placement attempt."""

    ACCEPT = "accept"
    RETRY = "retry"
    GIVE_UP = "give_up"


def decide_placement(
    cluster_id: str,
    exclude: ExclusionSet,
    attempt: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> PlacementDecision:
    """
    Decide what to do with an account that landed on cluster_id.

    Args:
        cluster_id: Cluster the account was placed on
        exclude: Clusters the account must avoid
        attempt: 1-based number of the attempt that produced the account
        max_attempts: Attempt budget, including the first attempt

    Returns:
        ACCEPT when the cluster is allowed, RETRY when it is excluded and
        budget remains, GIVE_UP when it is excluded and budget is spent
    """
    if not exclude.contains(cluster_id):
        return PlacementDecision.ACCEPT
    if attempt < max_attempts:
        return PlacementDecision.RETRY
    return PlacementDecision.GIVE_UP


def group_by_cluster(
    assignments: Iterable[ClusterAssignment],
) -> dict[str, list[ClusterAssignment]]:
    """Group assignments by normalized cluster id, preserving input order."""
    grouped: dict[str, list[ClusterAssignment]] = defaultdict(list)
    for assignment in assignments:
        grouped[normalize_cluster_id(assignment.cluster_id)].append(assignment)
    return dict(grouped)


def find_duplicate_assignments(
    assignments: Iterable[ClusterAssignment],
) -> list[ClusterAssignment]:
    """Return every assignment that shares its cluster with another assignment."""
    duplicates: list[ClusterAssignment] = []
    for members in group_by_cluster(assignments).values():
        if len(members) > 1:
            duplicates.extend(members)
    return duplicates


def distinct_clusters(assignments: Iterable[ClusterAssignment]) -> ExclusionSet:
    """Build an exclusion set from the clusters of existing accounts."""
    return ExclusionSet.of(assignment.cluster_id for assignment in assignments)
