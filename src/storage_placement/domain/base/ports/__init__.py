"""Domain ports."""

from storage_placement.domain.base.ports.cluster_lookup_port import ClusterLookupPort
from storage_placement.domain.base.ports.logging_port import LoggingPort
from storage_placement.domain.base.ports.storage_provider_port import StorageProviderPort

__all__: list[str] = ["ClusterLookupPort", "LoggingPort", "StorageProviderPort"]
