"""Domain port for storage account provider operations."""

from abc import ABC, abstractmethod

from storage_placement.domain.placement.value_objects import (
    AccountHandle,
    AccountScope,
    AccountSpec,
    ResourceGroup,
)


class StorageProviderPort(ABC):
    """
    Provider operations the placement engine depends on.

    Implementations convert every provider failure into a ProviderError
    subclass and never return partial results silently.
    """

    @abstractmethod
    def ensure_group(self, name: str, location: str) -> ResourceGroup:
        """Get or create a resource group. Idempotent."""

    @abstractmethod
    def check_name_available(self, name: str) -> bool:
        """Check whether an account name is valid and unused."""

    @abstractmethod
    def create_account(
        self, name: str, group_name: str, spec: AccountSpec, tags: dict[str, str]
    ) -> AccountHandle:
        """Create a storage account and wait for provisioning to finish."""

    @abstractmethod
    def delete_account(self, name: str, group_name: str) -> None:
        """Delete a storage account."""

    @abstractmethod
    def list_accounts(self, scope: AccountScope) -> list[AccountHandle]:
        """List accounts in the subscription, a group, or a single named account."""

    @abstractmethod
    def update_tags(self, name: str, group_name: str, tags: dict[str, str]) -> None:
        """Replace the tags of a storage account."""
