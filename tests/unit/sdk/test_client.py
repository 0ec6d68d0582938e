"""Tests for StoragePlacementClient."""

from unittest.mock import Mock, patch

import pytest

from storage_placement.config.schemas.app_schema import AppConfig
from storage_placement.domain.base.exceptions import (
    InvalidAccountSpecError,
    InvalidScopeError,
    NoAccountsFoundError,
)
from storage_placement.sdk.client import StoragePlacementClient
from tests.fixtures.fake_provider import FakeClusterLookup, InMemoryStorageProvider

MODULE = "storage_placement.sdk.client"


@pytest.fixture
def client(services):
    return StoragePlacementClient(services)


@pytest.mark.unit
class TestStoragePlacementClient:
    """Test the programmatic interface over in-memory collaborators."""

    def test_place_fleet(self, client, provider):
        accounts = client.place_fleet("data", "rg1", "eastus", sku="Standard_ZRS", count=2)

        assert len(accounts) == 2
        assert len({a.cluster_id for a in accounts}) == 2
        assert provider.groups["rg1"].location == "eastus"

    def test_place_account_with_exclusions(self, client, provider, lookup):
        lookup._clusters.extend(["c1", "c2"])

        account = client.place_account("data", "rg1", "eastus", exclude_clusters=["C1"])

        assert account.cluster_id == "c2"
        assert len(provider.deleted) == 1
        assert provider.calls[0][0] == "ensure_group"

    def test_place_account_without_exclusions_has_no_cluster(self, client):
        assert client.place_account("data", "rg1", "eastus").cluster_id == ""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"suffix": "Bad-Suffix"},
            {"sku": "Bogus_LRS"},
            {"kind": "BlobStorage"},
            {"location": ""},
        ],
    )
    def test_invalid_settings(self, client, provider, kwargs):
        arguments = {"suffix": "data", "group_name": "rg1", "location": "eastus", **kwargs}

        with pytest.raises(InvalidAccountSpecError) as exc_info:
            client.place_fleet(**arguments)

        assert exc_info.value.details["errors"]
        assert provider.calls == []

    def test_list_clusters(self, client, provider):
        provider.add_account("rg1", "a1")
        provider.add_account("rg2", "a2")

        assert [a.account_name for a in client.list_clusters_in_group("rg1")] == ["a1"]
        assert len(client.list_clusters_in_subscription()) == 2
        assert client.list_clusters_for_account("rg2", "a2")[0].account_name == "a2"

    def test_list_clusters_for_account_requires_group(self, client):
        with pytest.raises(InvalidScopeError):
            client.list_clusters_for_account(None, "a1")

    def test_list_empty_group(self, client):
        with pytest.raises(NoAccountsFoundError):
            client.list_clusters_in_group("empty")

    def test_find_duplicates(self, client, provider, lookup):
        provider.add_account("rg1", "a1")
        provider.add_account("rg1", "a2")
        lookup.table.update({"a1": "c9", "a2": "c9"})

        duplicates = client.find_duplicate_cluster_assignments("rg1")

        assert {d.account_name for d in duplicates} == {"a1", "a2"}

    def test_reconcile_orphans(self, client, provider):
        provider.add_account("rg1", "stale", tags={"placement-state": "pending"})

        assert client.reconcile_orphans("rg1", dry_run=True) == ["stale"]
        assert provider.deleted == []
        assert client.reconcile_orphans("rg1") == ["stale"]
        assert provider.deleted == ["stale"]

    def test_context_manager_closes_azure_client(self, services):
        azure_client = Mock()

        with StoragePlacementClient(services, azure_client) as client:
            assert client.services is services

        azure_client.close.assert_called_once()

    def test_from_config_wires_azure_collaborators(self):
        provider = InMemoryStorageProvider()
        config = AppConfig()

        with (
            patch(
                f"{MODULE}.build_azure_collaborators",
                return_value=(Mock(), provider, FakeClusterLookup()),
            ) as mock_build,
            patch(f"{MODULE}.is_configured", return_value=True),
        ):
            client = StoragePlacementClient.from_config(config)

        mock_build.assert_called_once_with(config, credential=None)
        assert client.services.provider is provider

    def test_from_config_sets_up_logging_once(self):
        config = AppConfig()
        collaborators = (Mock(), InMemoryStorageProvider(), FakeClusterLookup())

        with (
            patch(f"{MODULE}.build_azure_collaborators", return_value=collaborators),
            patch(f"{MODULE}.is_configured", side_effect=[False, True]),
            patch(f"{MODULE}.setup_logging") as mock_setup,
        ):
            StoragePlacementClient.from_config(config)
            StoragePlacementClient.from_config(config)

        mock_setup.assert_called_once_with(config.logging)
