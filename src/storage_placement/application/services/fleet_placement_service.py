"""Fleet placement: N storage accounts on N distinct clusters."""

from typing import Optional

from storage_placement.application.services.account_placement_service import (
    AccountPlacementService,
    new_run_id,
)
from storage_placement.application.services.cluster_resolution_service import (
    ClusterResolutionService,
)
from storage_placement.domain.base.exceptions import (
    ClusterExclusionExhaustedError,
    InvalidAccountSpecError,
    NameExhaustedError,
    PlacementError,
    PreexistingCollisionError,
)
from storage_placement.domain.base.ports import LoggingPort, StorageProviderPort
from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.policy import (
    distinct_clusters,
    find_duplicate_assignments,
)
from storage_placement.domain.placement.value_objects import (
    AccountSpec,
    ClusterAssignment,
    PlacedAccount,
)


class FleetPlacementService:
    """
    Places a fleet of accounts one slot at a time.

    Slots run strictly in order: the exclusion set handed to slot k holds the
    cluster of every account placed in slots 1..k-1, plus the group's existing
    clusters when those are avoided. A slot that cannot escape the exclusion
    set is skipped; any other error ends the run.
    """

    def __init__(
        self,
        provider: StorageProviderPort,
        account_placement: AccountPlacementService,
        cluster_resolver: ClusterResolutionService,
        logger: LoggingPort,
    ) -> None:
        self._provider = provider
        self._account_placement = account_placement
        self._cluster_resolver = cluster_resolver
        self._logger = logger

    def place_fleet(
        self,
        spec: AccountSpec,
        group_name: str,
        count: int,
        validate_existing: bool = False,
        avoid_existing_clusters: bool = False,
        run_id: Optional[str] = None,
    ) -> list[PlacedAccount]:
        """
        Place count accounts in group_name, each on its own cluster.

        Args:
            spec: Account settings shared by every slot
            group_name: Resource group, created when missing
            count: Number of accounts requested
            validate_existing: Fail before creating anything when existing
                accounts in the group already share a cluster
            avoid_existing_clusters: Also avoid clusters already used in the group
            run_id: Run id recorded in the account tags

        Returns:
            Placed accounts in slot order; shorter than count when slots were skipped

        Raises:
            InvalidAccountSpecError: If count is not positive
            PreexistingCollisionError: If validate_existing finds a collision
            NameExhaustedError: If a slot could not allocate a name
            PlacementError: Any other failure; placed_accounts holds the
                accounts committed before it
        """
        if count < 1:
            raise InvalidAccountSpecError(f"Account count must be positive, got {count}")

        run_id = run_id or new_run_id()
        self._provider.ensure_group(group_name, spec.location)

        existing: list[ClusterAssignment] = []
        if validate_existing or avoid_existing_clusters:
            existing = self._cluster_resolver.clusters_in_group_or_empty(group_name)

        if validate_existing:
            self._validate_existing(group_name, existing)

        exclude = ExclusionSet()
        if avoid_existing_clusters:
            exclude = distinct_clusters(existing)
            self._logger.info(
                "Avoiding %d existing clusters in %s: %s",
                len(exclude),
                group_name,
                ", ".join(exclude.sorted()),
            )

        placed: list[PlacedAccount] = []
        for slot in range(1, count + 1):
            self._logger.info("Placing account %d/%d in %s (run %s)", slot, count, group_name, run_id)
            try:
                account = self._place_slot(spec, group_name, exclude, run_id)
            except ClusterExclusionExhaustedError as e:
                self._logger.warning(
                    "Skipping slot %d/%d: every attempt landed on an excluded cluster (%s)",
                    slot,
                    count,
                    ", ".join(e.clusters),
                )
                continue
            except NameExhaustedError:
                raise
            except PlacementError as e:
                e.placed_accounts = tuple(placed)
                self._logger.error(
                    "Fleet placement in %s stopped at slot %d/%d with %d accounts placed: %s",
                    group_name,
                    slot,
                    count,
                    len(placed),
                    e,
                )
                raise

            placed.append(account)
            exclude = exclude.with_cluster(account.cluster_id)

        if len(placed) < count:
            self._logger.warning(
                "Placed %d of %d requested accounts in %s", len(placed), count, group_name
            )
        else:
            self._logger.info("Placed all %d accounts in %s", count, group_name)
        return placed

    def _validate_existing(self, group_name: str, existing: list[ClusterAssignment]) -> None:
        duplicates = find_duplicate_assignments(existing)
        if duplicates:
            self._logger.error(
                "Resource group %s already has accounts sharing clusters: %s",
                group_name,
                ", ".join(f"{d.account_name}={d.cluster_id}" for d in duplicates),
            )
            raise PreexistingCollisionError(group_name, duplicates)

    def _place_slot(
        self, spec: AccountSpec, group_name: str, exclude: ExclusionSet, run_id: str
    ) -> PlacedAccount:
        # Later slots exclude this cluster, so it is needed even when nothing is excluded yet.
        return self._account_placement.place(
            spec, group_name, exclude, run_id, resolve_cluster=True
        )
