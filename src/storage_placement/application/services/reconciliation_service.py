"""Cleanup of storage accounts left pending by an interrupted placement."""

from typing import Optional

from storage_placement.application.services.account_placement_service import PENDING_STATE
from storage_placement.domain.base.ports import LoggingPort, StorageProviderPort
from storage_placement.domain.placement.value_objects import AccountHandle, AccountScope


class ReconciliationService:
    """Deletes accounts still tagged as pending placement."""

    def __init__(
        self,
        provider: StorageProviderPort,
        logger: LoggingPort,
        pending_tag_key: str = "placement-state",
        run_tag_key: str = "placement-run",
    ) -> None:
        self._provider = provider
        self._logger = logger
        self.pending_tag_key = pending_tag_key
        self.run_tag_key = run_tag_key

    def find_orphans(self, group_name: str, run_id: Optional[str] = None) -> list[AccountHandle]:
        """List pending accounts in a group, optionally limited to one run."""
        orphans = []
        for account in self._provider.list_accounts(AccountScope.group(group_name)):
            if account.tags.get(self.pending_tag_key) != PENDING_STATE:
                continue
            if run_id and account.tags.get(self.run_tag_key) != run_id:
                continue
            orphans.append(account)
        return orphans

    def reconcile(
        self, group_name: str, dry_run: bool = False, run_id: Optional[str] = None
    ) -> list[str]:
        """
        Delete pending accounts in a group.

        Args:
            group_name: Resource group to clean
            dry_run: Only report what would be deleted
            run_id: Restrict cleanup to one placement run

        Returns:
            Names of the orphaned accounts found
        """
        orphans = self.find_orphans(group_name, run_id)
        if not orphans:
            self._logger.info("No orphaned storage accounts in %s", group_name)
            return []

        for account in orphans:
            if dry_run:
                self._logger.info("Would delete orphaned storage account %s", account.name)
                continue
            self._logger.warning("Deleting orphaned storage account %s", account.name)
            self._provider.delete_account(account.name, group_name)

        return [account.name for account in orphans]
