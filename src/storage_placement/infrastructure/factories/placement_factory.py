"""Builds placement services from configuration."""

import random
from dataclasses import dataclass
from typing import Any, Optional

from storage_placement.application.services import (
    AccountPlacementService,
    ClusterResolutionService,
    FleetPlacementService,
    NameAllocationService,
    ReconciliationService,
)
from storage_placement.config.schemas.placement_schema import PlacementConfig
from storage_placement.domain.base.ports import (
    ClusterLookupPort,
    LoggingPort,
    StorageProviderPort,
)
from storage_placement.infrastructure.adapters.logging_adapter import LoggingAdapter
from storage_placement.infrastructure.utilities.random_names import RandomNameGenerator


@dataclass
class PlacementServices:
    """The wired set of placement services."""

    provider: StorageProviderPort
    name_allocation: NameAllocationService
    cluster_resolution: ClusterResolutionService
    account_placement: AccountPlacementService
    fleet_placement: FleetPlacementService
    reconciliation: ReconciliationService


def build_placement_services(
    provider: StorageProviderPort,
    lookup: ClusterLookupPort,
    config: Optional[PlacementConfig] = None,
    logger: Optional[LoggingPort] = None,
    rng: Optional[random.Random] = None,
) -> PlacementServices:
    """
    Wire placement services around a provider and a cluster lookup.

    Args:
        provider: Storage provider port implementation
        lookup: Cluster lookup port implementation
        config: Placement configuration; defaults when omitted
        logger: Logger shared by the services
        rng: Random source for account name prefixes

    Returns:
        PlacementServices
    """
    config = config or PlacementConfig()
    logger = logger or LoggingAdapter("placement")

    name_allocation = NameAllocationService(
        provider,
        RandomNameGenerator(config.name_prefix_length, rng),
        logger,
        max_attempts=config.max_name_attempts,
    )
    cluster_resolution = ClusterResolutionService(
        provider, lookup, logger, endpoint_resolution=config.endpoint_resolution
    )
    account_placement = AccountPlacementService(
        provider,
        name_allocation,
        cluster_resolution,
        logger,
        max_attempts=config.max_placement_attempts,
        pending_tag_key=config.pending_tag_key,
        run_tag_key=config.run_tag_key,
    )
    fleet_placement = FleetPlacementService(
        provider, account_placement, cluster_resolution, logger
    )
    reconciliation = ReconciliationService(
        provider,
        logger,
        pending_tag_key=config.pending_tag_key,
        run_tag_key=config.run_tag_key,
    )
    return PlacementServices(
        provider=provider,
        name_allocation=name_allocation,
        cluster_resolution=cluster_resolution,
        account_placement=account_placement,
        fleet_placement=fleet_placement,
        reconciliation=reconciliation,
    )


def build_azure_collaborators(
    config: Any, logger: Optional[LoggingPort] = None, credential: Optional[Any] = None
) -> tuple[Any, StorageProviderPort, ClusterLookupPort]:
    """
    Create the Azure client, storage adapter and DNS lookup for an AppConfig.

    Credentials are resolved here, once per process.
    """
    from storage_placement.providers.azure.infrastructure.azure_client import AzureClient
    from storage_placement.providers.azure.infrastructure.dns_cluster_lookup import (
        DnsClusterLookup,
    )
    from storage_placement.providers.azure.infrastructure.storage_account_adapter import (
        AzureStorageAccountAdapter,
    )

    logger = logger or LoggingAdapter("azure")
    azure_client = AzureClient(config.azure, logger, credential=credential)
    provider = AzureStorageAccountAdapter(azure_client, logger)
    lookup = DnsClusterLookup(
        logger,
        timeout=config.placement.dns_timeout_seconds,
        endpoint_suffix=config.azure.storage_endpoint_suffix,
    )
    return azure_client, provider, lookup
