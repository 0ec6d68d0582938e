"""Exclusion set of storage clusters a placement must avoid."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storage_placement.domain.placement.value_objects import normalize_cluster_id


class ExclusionSet(BaseModel):
    """
    Immutable set of normalized cluster ids.

    A fleet run threads one snapshot into each placement and receives a new
    snapshot back when a placement succeeds, so the set only ever grows.
    """

    model_config = ConfigDict(frozen=True)

    clusters: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("clusters", mode="before")
    @classmethod
    def normalize_clusters(cls, value: Iterable[str]) -> frozenset[str]:
        return frozenset(
            normalize_cluster_id(cluster) for cluster in value if cluster and cluster.strip()
        )

    @classmethod
    def of(cls, clusters: Iterable[str] = ()) -> ExclusionSet:
        return cls(clusters=frozenset(clusters))

    def with_cluster(self, cluster_id: str) -> ExclusionSet:
        """Return a new set that also excludes cluster_id."""
        return self.union([cluster_id])

    def union(self, cluster_ids: Iterable[str]) -> ExclusionSet:
        """Return a new set that also excludes every id in cluster_ids."""
        return ExclusionSet(clusters=self.clusters | frozenset(cluster_ids))

    def contains(self, cluster_id: str) -> bool:
        return normalize_cluster_id(cluster_id) in self.clusters

    def is_empty(self) -> bool:
        return not self.clusters

    def sorted(self) -> list[str]:
        return sorted(self.clusters)

    def __contains__(self, cluster_id: object) -> bool:
        return isinstance(cluster_id, str) and self.contains(cluster_id)

    def __len__(self) -> int:
        return len(self.clusters)
