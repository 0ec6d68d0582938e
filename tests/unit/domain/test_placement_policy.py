"""Tests for pure placement decisions."""

import pytest

from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.policy import (
    PlacementDecision,
    decide_placement,
    distinct_clusters,
    find_duplicate_assignments,
    group_by_cluster,
)
from storage_placement.domain.placement.value_objects import ClusterAssignment


def assignment(name: str, cluster: str) -> ClusterAssignment:
    return ClusterAssignment(account_name=name, cluster_id=cluster)


@pytest.mark.unit
class TestDecidePlacement:
    """Test the accept/retry/give-up decision."""

    def test_accepts_cluster_outside_exclusion_set(self):
        decision = decide_placement("c3", ExclusionSet.of(["c1", "c2"]), attempt=1)

        assert decision == PlacementDecision.ACCEPT

    def test_accepts_on_last_attempt(self):
        decision = decide_placement("c3", ExclusionSet.of(["c1"]), attempt=3, max_attempts=3)

        assert decision == PlacementDecision.ACCEPT

    @pytest.mark.parametrize("attempt", [1, 2])
    def test_retries_while_budget_remains(self, attempt):
        decision = decide_placement("c1", ExclusionSet.of(["c1"]), attempt, max_attempts=3)

        assert decision == PlacementDecision.RETRY

    def test_gives_up_when_budget_spent(self):
        decision = decide_placement("c1", ExclusionSet.of(["c1"]), attempt=3, max_attempts=3)

        assert decision == PlacementDecision.GIVE_UP

    def test_comparison_ignores_case_and_whitespace(self):
        decision = decide_placement(" C1 ", ExclusionSet.of(["c1"]), attempt=1)

        assert decision == PlacementDecision.RETRY

    def test_empty_exclusion_set_always_accepts(self):
        assert decide_placement("c1", ExclusionSet(), attempt=3) == PlacementDecision.ACCEPT


@pytest.mark.unit
class TestDuplicateDetection:
    """Test grouping of accounts by cluster."""

    def test_no_duplicates_when_all_clusters_distinct(self):
        assignments = [assignment("a", "c1"), assignment("b", "c2"), assignment("c", "c3")]

        assert find_duplicate_assignments(assignments) == []

    def test_returns_every_account_sharing_a_cluster(self):
        assignments = [
            assignment("a", "c1"),
            assignment("b", "c2"),
            assignment("c", "C1"),
            assignment("d", "c3"),
            assignment("e", "c2"),
        ]

        duplicates = find_duplicate_assignments(assignments)

        assert {d.account_name for d in duplicates} == {"a", "b", "c", "e"}

    def test_group_by_cluster_normalizes_ids(self):
        grouped = group_by_cluster([assignment("a", "C1 "), assignment("b", "c1")])

        assert list(grouped) == ["c1"]
        assert [a.account_name for a in grouped["c1"]] == ["a", "b"]

    def test_distinct_clusters_builds_exclusion_set(self):
        exclude = distinct_clusters([assignment("a", "c1"), assignment("b", "C1"), assignment("c", "c2")])

        assert exclude.sorted() == ["c1", "c2"]
