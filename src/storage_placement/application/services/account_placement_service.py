"""Single storage account placement."""

import uuid
from typing import Optional

from storage_placement.application.services.cluster_resolution_service import (
    ClusterResolutionService,
)
from storage_placement.application.services.name_allocation_service import (
    NameAllocationService,
)
from storage_placement.domain.base.exceptions import ClusterExclusionExhaustedError
from storage_placement.domain.base.ports import LoggingPort, StorageProviderPort
from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.policy import (
    DEFAULT_MAX_ATTEMPTS,
    PlacementDecision,
    decide_placement,
)
from storage_placement.domain.placement.value_objects import AccountSpec, PlacedAccount

PENDING_STATE = "pending"
ACCEPTED_STATE = "accepted"


def new_run_id() -> str:
    """Generate an id shared by every account created in one run."""
    return uuid.uuid4().hex[:12]


class AccountPlacementService:
    """
    Creates one storage account on a cluster outside an exclusion set.

    Accounts are created tagged as pending and re-tagged as accepted once
    kept, so an account left behind by a crash between create and delete can
    be found and removed later.
    """

    def __init__(
        self,
        provider: StorageProviderPort,
        name_allocator: NameAllocationService,
        cluster_resolver: ClusterResolutionService,
        logger: LoggingPort,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        pending_tag_key: str = "placement-state",
        run_tag_key: str = "placement-run",
    ) -> None:
        self._provider = provider
        self._name_allocator = name_allocator
        self._cluster_resolver = cluster_resolver
        self._logger = logger
        self.max_attempts = max_attempts
        self.pending_tag_key = pending_tag_key
        self.run_tag_key = run_tag_key

    def place(
        self,
        spec: AccountSpec,
        group_name: str,
        exclude: Optional[ExclusionSet] = None,
        run_id: Optional[str] = None,
        resolve_cluster: bool = False,
    ) -> PlacedAccount:
        """
        Create an account whose cluster is not in exclude.

        When exclude is empty no cluster lookup is made, unless resolve_cluster
        is set, and the returned account has an empty cluster_id. The account
        stays tagged pending until its cluster is known.

        Args:
            spec: Account settings
            group_name: Resource group to create the account in
            exclude: Clusters to avoid
            run_id: Run id recorded in the account tags
            resolve_cluster: Look up the cluster even when exclude is empty

        Returns:
            The accepted account

        Raises:
            NameExhaustedError: If no account name could be allocated
            ClusterExclusionExhaustedError: If every attempt landed on an
                excluded cluster; no account is left behind
            ProviderError: If a provider call fails
        """
        exclude = exclude or ExclusionSet()
        run_id = run_id or new_run_id()

        name = self._create(spec, group_name, run_id)
        if exclude.is_empty():
            cluster_id = ""
            if resolve_cluster:
                cluster_id = self._cluster_resolver.resolve_account(group_name, name)
            self._accept(name, group_name, spec, run_id)
            return PlacedAccount(name=name, cluster_id=cluster_id)

        attempted_clusters: list[str] = []
        attempt = 1
        while True:
            cluster_id = self._cluster_resolver.resolve_account(group_name, name)
            attempted_clusters.append(cluster_id)
            decision = decide_placement(cluster_id, exclude, attempt, self.max_attempts)

            if decision == PlacementDecision.ACCEPT:
                self._accept(name, group_name, spec, run_id)
                self._logger.info(
                    "Placed storage account %s on cluster %s (attempt %d)",
                    name,
                    cluster_id,
                    attempt,
                )
                return PlacedAccount(name=name, cluster_id=cluster_id)

            self._logger.warning(
                "Storage account %s landed on excluded cluster %s (attempt %d/%d), deleting",
                name,
                cluster_id,
                attempt,
                self.max_attempts,
            )
            self._provider.delete_account(name, group_name)

            if decision == PlacementDecision.GIVE_UP:
                raise ClusterExclusionExhaustedError(attempt, attempted_clusters)

            attempt += 1
            name = self._create(spec, group_name, run_id)

    def _create(self, spec: AccountSpec, group_name: str, run_id: str) -> str:
        name = self._name_allocator.allocate_name(spec.suffix)
        self._logger.info("Creating storage account %s in %s", name, group_name)
        self._provider.create_account(name, group_name, spec, self._tags(spec, run_id, PENDING_STATE))
        return name

    def _accept(self, name: str, group_name: str, spec: AccountSpec, run_id: str) -> None:
        self._provider.update_tags(name, group_name, self._tags(spec, run_id, ACCEPTED_STATE))

    def _tags(self, spec: AccountSpec, run_id: str, state: str) -> dict[str, str]:
        return {**spec.tags, self.pending_tag_key: state, self.run_tag_key: run_id}
