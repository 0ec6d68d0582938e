"""Azure implementation of StorageProviderPort."""

import json
from typing import Any, Callable, Optional, TypeVar

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceRequestTimeoutError,
    ServiceResponseError,
    ServiceResponseTimeoutError,
)

from storage_placement.domain.base.exceptions import ProviderError, ProviderTimeoutError
from storage_placement.domain.base.ports import LoggingPort, StorageProviderPort
from storage_placement.domain.placement.value_objects import (
    AccountHandle,
    AccountScope,
    AccountSpec,
    ResourceGroup,
    ScopeKind,
)
from storage_placement.providers.azure.exceptions.azure_exceptions import (
    AuthorizationError,
    NetworkError,
    ProviderEntityNotFoundError,
    RateLimitError,
)
from storage_placement.providers.azure.infrastructure.azure_client import AzureClient

T = TypeVar("T")

STORAGE_ACCOUNT_TYPE = "Microsoft.Storage/storageAccounts"


def normalize_location(location: str) -> str:
    """'East US' and 'eastus' name the same region."""
    return location.replace(" ", "").lower()


def group_name_from_id(resource_id: Optional[str]) -> str:
    """Extract the resource group from an ARM resource id."""
    if not resource_id:
        return ""
    parts = resource_id.strip("/").split("/")
    for index, part in enumerate(parts[:-1]):
        if part.lower() == "resourcegroups":
            return parts[index + 1]
    return ""


class AzureStorageAccountAdapter(StorageProviderPort):
    """Storage account and resource group operations on Azure Resource Manager."""

    def __init__(self, azure_client: AzureClient, logger: LoggingPort) -> None:
        self.azure_client = azure_client
        self._logger = logger
        self.operation_timeout = azure_client.config.operation_timeout_seconds

    def ensure_group(self, name: str, location: str) -> ResourceGroup:
        """Get or create a resource group."""
        groups = self.azure_client.resource_client.resource_groups
        if self._call("check_group_existence", groups.check_existence, name):
            group = self._call("get_group", groups.get, name)
            if normalize_location(group.location) != normalize_location(location):
                self._logger.warning(
                    "Resource group %s exists in %s, not %s; using it as is",
                    name,
                    group.location,
                    location,
                )
            else:
                self._logger.debug("Resource group %s already exists in %s", name, group.location)
            return ResourceGroup(name=group.name, location=group.location)

        self._logger.info("Creating resource group %s in %s", name, location)
        group = self._call(
            "create_group", groups.create_or_update, name, {"location": location}
        )
        return ResourceGroup(name=group.name, location=group.location)

    def check_name_available(self, name: str) -> bool:
        """Check whether an account name is valid and unused."""
        result = self._call(
            "check_name_availability",
            self.azure_client.storage_client.storage_accounts.check_name_availability,
            {"name": name, "type": STORAGE_ACCOUNT_TYPE},
        )
        if not result.name_available:
            self._logger.debug(
                "Name %s unavailable: %s %s", name, result.reason, result.message or ""
            )
        return bool(result.name_available)

    def create_account(
        self, name: str, group_name: str, spec: AccountSpec, tags: dict[str, str]
    ) -> AccountHandle:
        """Create a storage account and wait for provisioning."""
        parameters: dict[str, Any] = {
            "sku": {"name": spec.sku_name.value},
            "kind": spec.kind.value,
            "location": spec.location,
            "tags": tags,
        }
        if spec.access_tier is not None:
            parameters["access_tier"] = spec.access_tier.value

        poller = self._call(
            "begin_create_account",
            self.azure_client.storage_client.storage_accounts.begin_create,
            group_name,
            name,
            parameters,
        )
        self._call("wait_create_account", poller.wait, timeout=self.operation_timeout)
        if not poller.done():
            raise ProviderTimeoutError(f"create_account:{name}", self.operation_timeout)
        account = self._call("create_account", poller.result)
        return self._to_handle(account, group_name)

    def delete_account(self, name: str, group_name: str) -> None:
        """Delete a storage account."""
        self._logger.info("Deleting storage account %s in %s", name, group_name)
        self._call(
            "delete_account",
            self.azure_client.storage_client.storage_accounts.delete,
            group_name,
            name,
        )

    def list_accounts(self, scope: AccountScope) -> list[AccountHandle]:
        """List accounts covered by scope."""
        accounts = self.azure_client.storage_client.storage_accounts

        if scope.kind == ScopeKind.ACCOUNT:
            try:
                account = self._call(
                    "get_account", accounts.get_properties, scope.group_name, scope.account_name
                )
            except ProviderEntityNotFoundError:
                return []
            return [self._to_handle(account, scope.group_name)]

        if scope.kind == ScopeKind.GROUP:
            return self._call(
                "list_accounts_by_group",
                lambda: [
                    self._to_handle(a, scope.group_name)
                    for a in accounts.list_by_resource_group(scope.group_name)
                ],
            )

        return self._call("list_accounts", lambda: [self._to_handle(a) for a in accounts.list()])

    def update_tags(self, name: str, group_name: str, tags: dict[str, str]) -> None:
        """Replace the tags of a storage account."""
        self._call(
            "update_account_tags",
            self.azure_client.storage_client.storage_accounts.update,
            group_name,
            name,
            {"tags": tags},
        )

    def _to_handle(self, account: Any, group_name: Optional[str] = None) -> AccountHandle:
        endpoints = getattr(account, "primary_endpoints", None)
        return AccountHandle(
            name=account.name,
            group_name=group_name or group_name_from_id(getattr(account, "id", None)),
            location=getattr(account, "location", None) or "",
            blob_endpoint=getattr(endpoints, "blob", None) if endpoints else None,
            tags=dict(getattr(account, "tags", None) or {}),
        )

    def _call(self, operation: str, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Execute an Azure SDK call, converting SDK errors to domain exceptions.

        Args:
            operation: Operation name used in logs and errors
            func: SDK method to execute
            *args: Positional arguments for the method
            **kwargs: Keyword arguments for the method

        Returns:
            The method's return value

        Raises:
            ProviderError: Converted from any AzureError
        """
        self._logger.debug(
            "Calling Azure operation %s with payload: %s",
            operation,
            json.dumps({"args": args, "kwargs": kwargs}, default=str),
        )
        try:
            return func(*args, **kwargs)
        except AzureError as e:
            raise self._convert_azure_error(e, operation) from e

    def _convert_azure_error(self, error: AzureError, operation: str) -> ProviderError:
        """Convert an Azure SDK error to a domain exception."""
        message = getattr(error, "message", None) or str(error)

        if isinstance(error, (ServiceRequestTimeoutError, ServiceResponseTimeoutError)):
            return ProviderTimeoutError(operation, self.operation_timeout)
        if isinstance(error, ClientAuthenticationError):
            return AuthorizationError(f"Azure authentication failed: {message}", operation)
        if isinstance(error, ResourceNotFoundError):
            return ProviderEntityNotFoundError(message, operation)
        if isinstance(error, HttpResponseError):
            status = error.status_code
            if status == 403:
                return AuthorizationError(message, operation, {"status_code": status})
            if status == 429:
                return RateLimitError(message, operation, {"status_code": status})
            if status in (408, 504):
                return ProviderTimeoutError(operation, self.operation_timeout)
            return ProviderError(
                f"Azure Error: {status} - {message}", operation, {"status_code": status}
            )
        if isinstance(error, (ServiceRequestError, ServiceResponseError)):
            return NetworkError(f"Azure connection failed: {message}", operation)
        return ProviderError(f"Azure Error: {message}", operation)
