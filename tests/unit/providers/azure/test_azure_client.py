"""Tests for AzureClient."""

from unittest.mock import Mock, patch

import pytest

from storage_placement.domain.base.exceptions import ConfigurationError
from storage_placement.providers.azure.configuration.config import AzureProviderConfig
from storage_placement.providers.azure.infrastructure.azure_client import AzureClient

MODULE = "storage_placement.providers.azure.infrastructure.azure_client"


@pytest.mark.unit
@pytest.mark.azure
class TestAzureClient:
    """Test credential handling and lazy client creation."""

    def test_requires_subscription(self):
        with pytest.raises(ConfigurationError):
            AzureClient(AzureProviderConfig(), Mock(), credential=Mock())

    @patch(f"{MODULE}.DefaultAzureCredential")
    def test_credential_resolved_once_with_managed_identity(self, mock_credential):
        config = AzureProviderConfig(subscription_id="sub", managed_identity_client_id="mi-1")

        client = AzureClient(config, Mock())

        mock_credential.assert_called_once_with(managed_identity_client_id="mi-1")
        assert client.credential is mock_credential.return_value

    @patch(f"{MODULE}.StorageManagementClient")
    def test_storage_client_is_lazy_and_cached(self, mock_storage):
        credential = Mock()
        config = AzureProviderConfig(
            subscription_id="sub", connection_timeout_seconds=5, read_timeout_seconds=20, retry_total=1
        )
        client = AzureClient(config, Mock(), credential=credential)

        mock_storage.assert_not_called()
        first = client.storage_client
        second = client.storage_client

        assert first is second
        mock_storage.assert_called_once_with(
            credential, "sub", connection_timeout=5, read_timeout=20, retry_total=1
        )

    @patch(f"{MODULE}.ResourceManagementClient")
    @patch(f"{MODULE}.StorageManagementClient")
    def test_close_closes_created_clients(self, mock_storage, mock_resource):
        credential = Mock()
        client = AzureClient(AzureProviderConfig(subscription_id="sub"), Mock(), credential=credential)
        client.storage_client

        client.close()

        mock_storage.return_value.close.assert_called_once()
        mock_resource.return_value.close.assert_not_called()
        credential.close.assert_called_once()
