"""Tests for AzureStorageAccountAdapter."""

from unittest.mock import Mock

import pytest
from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
    ServiceRequestError,
    ServiceResponseTimeoutError,
)

from storage_placement.domain.base.exceptions import ProviderError, ProviderTimeoutError
from storage_placement.domain.placement.value_objects import AccountScope, AccountSpec
from storage_placement.providers.azure.configuration.config import AzureProviderConfig
from storage_placement.providers.azure.exceptions.azure_exceptions import (
    AuthorizationError,
    NetworkError,
    ProviderEntityNotFoundError,
    RateLimitError,
)
from storage_placement.providers.azure.infrastructure.storage_account_adapter import (
    AzureStorageAccountAdapter,
    group_name_from_id,
    normalize_location,
)


def http_error(status_code: int, message: str = "boom") -> HttpResponseError:
    error = HttpResponseError(message=message)
    error.status_code = status_code
    return error


def sdk_account(name, blob="https://x.blob.core.windows.net/", group="rg1", tags=None):
    account = Mock()
    account.name = name
    account.id = (
        f"/subscriptions/sub/resourceGroups/{group}/providers/"
        f"Microsoft.Storage/storageAccounts/{name}"
    )
    account.location = "eastus"
    account.tags = tags
    account.primary_endpoints = Mock(blob=blob) if blob else None
    return account


@pytest.fixture
def azure_client():
    client = Mock()
    client.config = AzureProviderConfig(subscription_id="sub", operation_timeout_seconds=30)
    return client


@pytest.fixture
def adapter(azure_client):
    return AzureStorageAccountAdapter(azure_client, Mock())


@pytest.fixture
def storage_accounts(azure_client):
    return azure_client.storage_client.storage_accounts


@pytest.fixture
def resource_groups(azure_client):
    return azure_client.resource_client.resource_groups


@pytest.mark.unit
@pytest.mark.azure
class TestResourceGroups:
    """Test ensure_group."""

    def test_creates_missing_group(self, adapter, resource_groups):
        resource_groups.check_existence.return_value = False
        created = Mock(location="eastus")
        created.name = "rg1"
        resource_groups.create_or_update.return_value = created

        group = adapter.ensure_group("rg1", "eastus")

        resource_groups.create_or_update.assert_called_once_with("rg1", {"location": "eastus"})
        assert (group.name, group.location) == ("rg1", "eastus")

    def test_reuses_existing_group(self, adapter, resource_groups):
        resource_groups.check_existence.return_value = True
        existing = Mock(location="East US")
        existing.name = "rg1"
        resource_groups.get.return_value = existing

        group = adapter.ensure_group("rg1", "eastus")

        resource_groups.create_or_update.assert_not_called()
        assert group.location == "East US"
        adapter._logger.warning.assert_not_called()

    def test_location_mismatch_warns(self, adapter, resource_groups):
        resource_groups.check_existence.return_value = True
        existing = Mock(location="westus")
        existing.name = "rg1"
        resource_groups.get.return_value = existing

        adapter.ensure_group("rg1", "eastus")

        adapter._logger.warning.assert_called_once()


@pytest.mark.unit
@pytest.mark.azure
class TestStorageAccounts:
    """Test account operations against a mocked management client."""

    def test_check_name_available(self, adapter, storage_accounts):
        storage_accounts.check_name_availability.return_value = Mock(name_available=True)

        assert adapter.check_name_available("abcdata") is True
        storage_accounts.check_name_availability.assert_called_once_with(
            {"name": "abcdata", "type": "Microsoft.Storage/storageAccounts"}
        )

    def test_check_name_unavailable(self, adapter, storage_accounts):
        storage_accounts.check_name_availability.return_value = Mock(
            name_available=False, reason="AlreadyExists", message="taken"
        )

        assert adapter.check_name_available("abcdata") is False

    def test_create_account_waits_for_provisioning(self, adapter, storage_accounts):
        poller = Mock()
        poller.done.return_value = True
        poller.result.return_value = sdk_account("abcdata")
        storage_accounts.begin_create.return_value = poller
        spec = AccountSpec(
            suffix="data",
            location="eastus",
            sku_name="Standard_GRS",
            kind="BlobStorage",
            access_tier="Hot",
        )

        handle = adapter.create_account("abcdata", "rg1", spec, {"placement-state": "pending"})

        storage_accounts.begin_create.assert_called_once_with(
            "rg1",
            "abcdata",
            {
                "sku": {"name": "Standard_GRS"},
                "kind": "BlobStorage",
                "location": "eastus",
                "tags": {"placement-state": "pending"},
                "access_tier": "Hot",
            },
        )
        poller.wait.assert_called_once_with(timeout=30)
        assert handle.name == "abcdata"
        assert handle.group_name == "rg1"
        assert handle.blob_endpoint == "https://x.blob.core.windows.net/"

    def test_create_account_without_tier_omits_it(self, adapter, storage_accounts):
        poller = Mock()
        poller.done.return_value = True
        poller.result.return_value = sdk_account("abcdata")
        storage_accounts.begin_create.return_value = poller

        adapter.create_account("abcdata", "rg1", AccountSpec(suffix="data", location="eastus"), {})

        parameters = storage_accounts.begin_create.call_args.args[2]
        assert "access_tier" not in parameters

    def test_create_account_timeout(self, adapter, storage_accounts):
        poller = Mock()
        poller.done.return_value = False
        storage_accounts.begin_create.return_value = poller

        with pytest.raises(ProviderTimeoutError) as exc_info:
            adapter.create_account(
                "abcdata", "rg1", AccountSpec(suffix="data", location="eastus"), {}
            )

        assert exc_info.value.timeout == 30
        poller.result.assert_not_called()

    def test_delete_account(self, adapter, storage_accounts):
        adapter.delete_account("abcdata", "rg1")

        storage_accounts.delete.assert_called_once_with("rg1", "abcdata")

    def test_update_tags(self, adapter, storage_accounts):
        adapter.update_tags("abcdata", "rg1", {"a": "b"})

        storage_accounts.update.assert_called_once_with("rg1", "abcdata", {"tags": {"a": "b"}})

    def test_list_group(self, adapter, storage_accounts):
        storage_accounts.list_by_resource_group.return_value = [
            sdk_account("a1", tags={"k": "v"}),
            sdk_account("a2", blob=None),
        ]

        handles = adapter.list_accounts(AccountScope.group("rg1"))

        assert [h.name for h in handles] == ["a1", "a2"]
        assert handles[0].tags == {"k": "v"}
        assert handles[1].blob_endpoint is None

    def test_list_subscription_reads_group_from_id(self, adapter, storage_accounts):
        storage_accounts.list.return_value = [sdk_account("a1", group="other")]

        handles = adapter.list_accounts(AccountScope.subscription())

        assert handles[0].group_name == "other"

    def test_list_single_account(self, adapter, storage_accounts):
        storage_accounts.get_properties.return_value = sdk_account("a1")

        handles = adapter.list_accounts(AccountScope.account("rg1", "a1"))

        storage_accounts.get_properties.assert_called_once_with("rg1", "a1")
        assert [h.name for h in handles] == ["a1"]

    def test_list_missing_account_is_empty(self, adapter, storage_accounts):
        storage_accounts.get_properties.side_effect = ResourceNotFoundError("not found")

        assert adapter.list_accounts(AccountScope.account("rg1", "a1")) == []

    def test_list_errors_raised_during_iteration_are_converted(self, adapter, storage_accounts):
        def failing_pages(group_name):
            raise http_error(500)
            yield  # pragma: no cover

        storage_accounts.list_by_resource_group.side_effect = failing_pages

        with pytest.raises(ProviderError):
            adapter.list_accounts(AccountScope.group("rg1"))


@pytest.mark.unit
@pytest.mark.azure
class TestErrorConversion:
    """Test mapping of Azure SDK errors to domain exceptions."""

    @pytest.mark.parametrize(
        "error, expected",
        [
            (ClientAuthenticationError("no credential"), AuthorizationError),
            (ResourceNotFoundError("missing"), ProviderEntityNotFoundError),
            (http_error(403), AuthorizationError),
            (http_error(429), RateLimitError),
            (http_error(504), ProviderTimeoutError),
            (ServiceResponseTimeoutError("slow"), ProviderTimeoutError),
            (ServiceRequestError("unreachable"), NetworkError),
        ],
    )
    def test_converts_known_errors(self, adapter, storage_accounts, error, expected):
        storage_accounts.delete.side_effect = error

        with pytest.raises(expected) as exc_info:
            adapter.delete_account("abcdata", "rg1")

        assert exc_info.value.operation == "delete_account"
        assert exc_info.value.__cause__ is error

    def test_other_http_errors_keep_status(self, adapter, storage_accounts):
        storage_accounts.delete.side_effect = http_error(409, "conflict")

        with pytest.raises(ProviderError) as exc_info:
            adapter.delete_account("abcdata", "rg1")

        assert type(exc_info.value) is ProviderError
        assert exc_info.value.details["status_code"] == 409


@pytest.mark.unit
class TestHelpers:
    """Test module helpers."""

    def test_normalize_location(self):
        assert normalize_location("East US 2") == "eastus2"

    @pytest.mark.parametrize(
        "resource_id, expected",
        [
            ("/subscriptions/s/resourceGroups/rg-1/providers/x/y/z", "rg-1"),
            ("/subscriptions/s/resourcegroups/RG/providers/x", "RG"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_group_name_from_id(self, resource_id, expected):
        assert group_name_from_id(resource_id) == expected
