"""DNS based storage cluster discovery.

A storage account's blob endpoint is a CNAME onto the cluster that serves it:

    myaccount.blob.core.windows.net -> blob.bl5prdstr09a.store.core.windows.net

The label after the service name is the cluster id.
"""

import socket
from typing import Callable, Optional
from urllib.parse import urlparse

from storage_placement.domain.base.ports import ClusterLookupPort, LoggingPort
from storage_placement.domain.placement.value_objects import AccountHandle, normalize_cluster_id
from storage_placement.infrastructure.utilities.timeout import call_with_timeout
from storage_placement.providers.azure.exceptions.azure_exceptions import ClusterLookupError

# hostname -> (canonical name, aliases, addresses)
HostResolver = Callable[[str], tuple[str, list[str], list[str]]]

STORAGE_SERVICES = ("blob", "table", "queue", "file", "dfs", "web")


class DnsClusterLookup(ClusterLookupPort):
    """Resolves storage clusters from the CNAME chain of account endpoints."""

    def __init__(
        self,
        logger: LoggingPort,
        timeout: float = 10.0,
        endpoint_suffix: str = "core.windows.net",
        resolver: Optional[HostResolver] = None,
    ) -> None:
        self._logger = logger
        self.timeout = timeout
        self.store_suffix = f".store.{endpoint_suffix.strip('.').lower()}"
        self._resolver = resolver or socket.gethostbyname_ex

    def resolve_endpoint_host(self, account: AccountHandle) -> Optional[str]:
        """Return the host of the account's blob endpoint."""
        if not account.blob_endpoint:
            return None
        endpoint = account.blob_endpoint.strip()
        if "://" not in endpoint:
            endpoint = f"https://{endpoint}"
        return urlparse(endpoint).hostname or None

    def resolve_cluster_from_host(self, hostname: str) -> str:
        """
        Follow hostname's CNAME chain to its storage cluster.

        Raises:
            ClusterLookupError: If the lookup fails or the host is not a CNAME
            ProviderTimeoutError: If the lookup exceeds the timeout
        """
        operation = f"resolve_cluster:{hostname}"
        try:
            canonical, aliases, _ = call_with_timeout(
                lambda: self._resolver(hostname), self.timeout, operation
            )
        except OSError as e:
            raise ClusterLookupError(
                f"DNS lookup failed for {hostname}: {e}", operation, {"host": hostname}
            ) from e

        for name in [canonical, *aliases]:
            cluster_id = self.cluster_from_canonical_name(name)
            if cluster_id:
                return cluster_id

        canonical = canonical.rstrip(".").lower()
        if not canonical or canonical == hostname.rstrip(".").lower():
            raise ClusterLookupError(
                f"Endpoint {hostname} does not alias a storage cluster",
                operation,
                {"host": hostname},
            )

        self._logger.debug(
            "Canonical name %s of %s has no cluster label, using it whole", canonical, hostname
        )
        return normalize_cluster_id(canonical)

    def cluster_from_canonical_name(self, name: str) -> Optional[str]:
        """Extract <cluster> from <service>.<cluster>.store.<suffix>, or None."""
        name = name.rstrip(".").lower()
        if not name.endswith(self.store_suffix):
            return None
        labels = name[: -len(self.store_suffix)].split(".")
        if len(labels) != 2 or labels[0] not in STORAGE_SERVICES or not labels[1]:
            return None
        return labels[1]
