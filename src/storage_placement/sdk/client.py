"""Programmatic interface for placement-aware storage account creation."""

from collections.abc import Iterable
from typing import Any, Optional, Union

from pydantic import ValidationError

from storage_placement.config.schemas.app_schema import AppConfig
from storage_placement.domain.base.exceptions import InvalidAccountSpecError
from storage_placement.domain.placement.exclusion_set import ExclusionSet
from storage_placement.domain.placement.value_objects import (
    AccessTier,
    AccountKind,
    AccountScope,
    AccountSpec,
    ClusterAssignment,
    PlacedAccount,
    SkuName,
)
from storage_placement.infrastructure.factories.placement_factory import (
    PlacementServices,
    build_azure_collaborators,
    build_placement_services,
)
from storage_placement.infrastructure.logging.logger import is_configured, setup_logging


class StoragePlacementClient:
    """
    Places storage accounts on distinct storage clusters.

    Usage:
        client = StoragePlacementClient.from_config(load_config())
        accounts = client.place_fleet("data", "rg1", "eastus", count=3)
    """

    def __init__(self, services: PlacementServices, azure_client: Optional[Any] = None) -> None:
        self.services = services
        self._azure_client = azure_client

    @classmethod
    def from_config(
        cls, config: Optional[AppConfig] = None, credential: Optional[Any] = None
    ) -> "StoragePlacementClient":
        """
        Build a client backed by Azure from application configuration.

        Logging is set up from config.logging unless the caller already ran
        setup_logging.
        """
        config = config or AppConfig()
        if not is_configured():
            setup_logging(config.logging)
        azure_client, provider, lookup = build_azure_collaborators(config, credential=credential)
        services = build_placement_services(provider, lookup, config.placement)
        return cls(services, azure_client)

    def __enter__(self) -> "StoragePlacementClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._azure_client is not None:
            self._azure_client.close()

    def place_fleet(
        self,
        suffix: str,
        group_name: str,
        location: str,
        sku: Union[str, SkuName] = SkuName.STANDARD_LRS,
        kind: Union[str, AccountKind] = AccountKind.STORAGE,
        count: int = 3,
        validate_existing: bool = False,
        avoid_existing_clusters: bool = False,
        access_tier: Optional[Union[str, AccessTier]] = None,
        tags: Optional[dict[str, str]] = None,
    ) -> list[PlacedAccount]:
        """Create count accounts in group_name, each on a different storage cluster."""
        spec = self._build_spec(suffix, location, sku, kind, access_tier, tags)
        return self.services.fleet_placement.place_fleet(
            spec,
            group_name,
            count,
            validate_existing=validate_existing,
            avoid_existing_clusters=avoid_existing_clusters,
        )

    def place_account(
        self,
        suffix: str,
        group_name: str,
        location: str,
        sku: Union[str, SkuName] = SkuName.STANDARD_LRS,
        kind: Union[str, AccountKind] = AccountKind.STORAGE,
        exclude_clusters: Iterable[str] = (),
        access_tier: Optional[Union[str, AccessTier]] = None,
        tags: Optional[dict[str, str]] = None,
    ) -> PlacedAccount:
        """Create one account in group_name on a cluster outside exclude_clusters."""
        spec = self._build_spec(suffix, location, sku, kind, access_tier, tags)
        self.services.provider.ensure_group(group_name, spec.location)
        return self.services.account_placement.place(
            spec, group_name, ExclusionSet.of(exclude_clusters)
        )

    def list_clusters_in_group(self, group_name: str) -> list[ClusterAssignment]:
        return self.services.cluster_resolution.resolve(AccountScope.group(group_name))

    def list_clusters_for_account(
        self, group_name: Optional[str], account_name: str
    ) -> list[ClusterAssignment]:
        return self.services.cluster_resolution.resolve(
            AccountScope.account(group_name, account_name)
        )

    def list_clusters_in_subscription(self) -> list[ClusterAssignment]:
        return self.services.cluster_resolution.resolve(AccountScope.subscription())

    def find_duplicate_cluster_assignments(self, group_name: str) -> list[ClusterAssignment]:
        """Accounts sharing a cluster with another account; empty when all are distinct."""
        return self.services.cluster_resolution.find_duplicates(group_name)

    def reconcile_orphans(self, group_name: str, dry_run: bool = False) -> list[str]:
        """Delete accounts left pending by an interrupted placement."""
        return self.services.reconciliation.reconcile(group_name, dry_run=dry_run)

    @staticmethod
    def _build_spec(
        suffix: str,
        location: str,
        sku: Union[str, SkuName],
        kind: Union[str, AccountKind],
        access_tier: Optional[Union[str, AccessTier]],
        tags: Optional[dict[str, str]],
    ) -> AccountSpec:
        try:
            return AccountSpec(
                suffix=suffix,
                location=location,
                sku_name=sku,
                kind=kind,
                access_tier=access_tier,
                tags=tags or {},
            )
        except ValidationError as e:
            raise InvalidAccountSpecError(
                f"Invalid account settings: {e}", {"errors": e.errors(include_url=False)}
            ) from e
