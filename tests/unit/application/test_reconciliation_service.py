"""Tests for ReconciliationService."""

from unittest.mock import Mock

import pytest

from storage_placement.application.services.reconciliation_service import (
    ReconciliationService,
)
from tests.fixtures.fake_provider import InMemoryStorageProvider


@pytest.fixture
def provider():
    provider = InMemoryStorageProvider()
    provider.add_account(
        "rg1", "orphan1", tags={"placement-state": "pending", "placement-run": "r1"}
    )
    provider.add_account(
        "rg1", "orphan2", tags={"placement-state": "pending", "placement-run": "r2"}
    )
    provider.add_account(
        "rg1", "kept", tags={"placement-state": "accepted", "placement-run": "r1"}
    )
    provider.add_account("rg1", "unmanaged")
    provider.add_account("rg2", "elsewhere", tags={"placement-state": "pending"})
    return provider


@pytest.mark.unit
class TestReconciliationService:
    """Test cleanup of pending accounts."""

    def test_finds_only_pending_accounts_in_group(self, provider):
        service = ReconciliationService(provider, Mock())

        orphans = service.find_orphans("rg1")

        assert sorted(a.name for a in orphans) == ["orphan1", "orphan2"]

    def test_filters_by_run(self, provider):
        service = ReconciliationService(provider, Mock())

        assert [a.name for a in service.find_orphans("rg1", run_id="r2")] == ["orphan2"]

    def test_deletes_orphans(self, provider):
        service = ReconciliationService(provider, Mock())

        names = service.reconcile("rg1")

        assert sorted(names) == ["orphan1", "orphan2"]
        assert sorted(provider.deleted) == ["orphan1", "orphan2"]
        assert ("rg1", "kept") in provider.accounts
        assert ("rg2", "elsewhere") in provider.accounts

    def test_dry_run_deletes_nothing(self, provider):
        service = ReconciliationService(provider, Mock())

        names = service.reconcile("rg1", dry_run=True)

        assert len(names) == 2
        assert provider.deleted == []

    def test_custom_tag_keys(self):
        provider = InMemoryStorageProvider()
        provider.add_account("rg1", "x", tags={"state": "pending"})
        service = ReconciliationService(provider, Mock(), pending_tag_key="state")

        assert service.reconcile("rg1") == ["x"]
