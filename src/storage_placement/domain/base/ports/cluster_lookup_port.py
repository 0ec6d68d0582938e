"""Domain port for discovering the physical cluster behind an account."""

from abc import ABC, abstractmethod
from typing import Optional

from storage_placement.domain.placement.value_objects import AccountHandle


class ClusterLookupPort(ABC):
    """Resolve account -> endpoint host -> cluster id."""

    @abstractmethod
    def resolve_endpoint_host(self, account: AccountHandle) -> Optional[str]:
        """Return the account's endpoint host name, or None when it has none."""

    @abstractmethod
    def resolve_cluster_from_host(self, hostname: str) -> str:
        """Return the cluster id serving hostname."""
