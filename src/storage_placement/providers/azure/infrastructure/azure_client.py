"""Azure management client wrapper."""

from typing import Any, Optional

from azure.identity import DefaultAzureCredential
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.storage import StorageManagementClient

from storage_placement.domain.base.exceptions import ConfigurationError
from storage_placement.domain.base.ports import LoggingPort
from storage_placement.providers.azure.configuration.config import AzureProviderConfig


class AzureClient:
    """
    Holds the credential and lazily created management clients.

    The credential is resolved once, when the client is built, and shared by
    every management client.
    """

    def __init__(
        self,
        config: AzureProviderConfig,
        logger: LoggingPort,
        credential: Optional[Any] = None,
    ) -> None:
        """
        Initialize Azure client wrapper.

        Args:
            config: Azure provider configuration
            logger: Logger for logging messages
            credential: Token credential; DefaultAzureCredential when omitted

        Raises:
            ConfigurationError: If no subscription id is configured
        """
        if not config.subscription_id:
            raise ConfigurationError(
                "Azure subscription id is required (set azure.subscription_id "
                "or AZURE_SUBSCRIPTION_ID)"
            )

        self.config = config
        self.subscription_id = config.subscription_id
        self._logger = logger
        self.credential = credential or self._create_credential()

        # Transport settings shared by every management client
        self.client_kwargs: dict[str, Any] = {
            "connection_timeout": config.connection_timeout_seconds,
            "read_timeout": config.read_timeout_seconds,
            "retry_total": config.retry_total,
        }

        self._storage_client: Optional[StorageManagementClient] = None
        self._resource_client: Optional[ResourceManagementClient] = None

        self._logger.info(
            "Azure client initialized for subscription %s, retries: %d, timeouts: "
            "connect=%ds, read=%ds, operation=%ss",
            self.subscription_id,
            config.retry_total,
            config.connection_timeout_seconds,
            config.read_timeout_seconds,
            config.operation_timeout_seconds,
        )

    def _create_credential(self) -> DefaultAzureCredential:
        kwargs: dict[str, Any] = {}
        if self.config.managed_identity_client_id:
            kwargs["managed_identity_client_id"] = self.config.managed_identity_client_id
        self._logger.debug("Resolving Azure credentials with DefaultAzureCredential")
        return DefaultAzureCredential(**kwargs)

    @property
    def storage_client(self) -> StorageManagementClient:
        """Lazy initialization of the storage management client."""
        if self._storage_client is None:
            self._logger.debug("Initializing storage management client on first use")
            self._storage_client = StorageManagementClient(
                self.credential, self.subscription_id, **self.client_kwargs
            )
        return self._storage_client

    @property
    def resource_client(self) -> ResourceManagementClient:
        """Lazy initialization of the resource management client."""
        if self._resource_client is None:
            self._logger.debug("Initializing resource management client on first use")
            self._resource_client = ResourceManagementClient(
                self.credential, self.subscription_id, **self.client_kwargs
            )
        return self._resource_client

    def close(self) -> None:
        """Close management clients and the credential."""
        for client in (self._storage_client, self._resource_client):
            if client is not None:
                client.close()
        close_credential = getattr(self.credential, "close", None)
        if callable(close_credential):
            close_credential()
