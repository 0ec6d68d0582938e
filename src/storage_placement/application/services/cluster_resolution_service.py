"""Cluster resolution for storage accounts."""

from typing import Optional

from storage_placement.config.schemas.placement_schema import EndpointResolutionMode
from storage_placement.domain.base.exceptions import (
    EndpointUnavailableError,
    InvalidScopeError,
    NoAccountsFoundError,
)
from storage_placement.domain.base.ports import (
    ClusterLookupPort,
    LoggingPort,
    StorageProviderPort,
)
from storage_placement.domain.placement.policy import find_duplicate_assignments
from storage_placement.domain.placement.value_objects import (
    AccountHandle,
    AccountScope,
    ClusterAssignment,
    ScopeKind,
    normalize_cluster_id,
)


class ClusterResolutionService:
    """
    Maps storage accounts to the physical cluster they were placed on.

    In lenient mode, accounts without an endpoint are skipped when a scope
    covers several accounts; strict mode fails on them instead. A single
    named account without an endpoint always fails.
    """

    def __init__(
        self,
        provider: StorageProviderPort,
        lookup: ClusterLookupPort,
        logger: LoggingPort,
        endpoint_resolution: EndpointResolutionMode = EndpointResolutionMode.LENIENT,
    ) -> None:
        self._provider = provider
        self._lookup = lookup
        self._logger = logger
        self.endpoint_resolution = endpoint_resolution

    def resolve(self, scope: AccountScope) -> list[ClusterAssignment]:
        """
        Resolve the cluster of every account in scope.

        Raises:
            InvalidScopeError: If an account name is given without its group
            NoAccountsFoundError: If the scope matches no accounts
            EndpointUnavailableError: For a single account, or any account in
                strict mode, without an endpoint
            ProviderError: If listing or lookup fails
        """
        self._validate_scope(scope)

        accounts = self._provider.list_accounts(scope)
        if not accounts:
            raise NoAccountsFoundError(
                f"No storage accounts found in {scope.describe()}", {"scope": scope.kind.value}
            )

        single = scope.kind == ScopeKind.ACCOUNT
        assignments: list[ClusterAssignment] = []
        for account in accounts:
            cluster_id = self._resolve_account(account, strict=single)
            if cluster_id is not None:
                assignments.append(
                    ClusterAssignment(account_name=account.name, cluster_id=cluster_id)
                )

        if not assignments:
            raise NoAccountsFoundError(
                f"No storage accounts with a reachable endpoint in {scope.describe()}",
                {"scope": scope.kind.value, "skipped": [a.name for a in accounts]},
            )

        self._logger.debug(
            "Resolved %d cluster assignments in %s", len(assignments), scope.describe()
        )
        return assignments

    def resolve_account(self, group_name: str, account_name: str) -> str:
        """Return the cluster id of one named account."""
        return self.resolve(AccountScope.account(group_name, account_name))[0].cluster_id

    def clusters_in_group(self, group_name: str) -> list[ClusterAssignment]:
        """Resolve every account in a resource group."""
        return self.resolve(AccountScope.group(group_name))

    def clusters_in_group_or_empty(self, group_name: str) -> list[ClusterAssignment]:
        """Like clusters_in_group, but an empty group yields an empty list."""
        try:
            return self.clusters_in_group(group_name)
        except NoAccountsFoundError:
            self._logger.info("Resource group %s has no existing storage accounts", group_name)
            return []

    def find_duplicates(self, group_name: str) -> list[ClusterAssignment]:
        """Return every account in the group sharing a cluster with another account."""
        return find_duplicate_assignments(self.clusters_in_group(group_name))

    def _validate_scope(self, scope: AccountScope) -> None:
        if scope.kind == ScopeKind.ACCOUNT:
            if not scope.account_name:
                raise InvalidScopeError("Account scope requires an account name")
            if not scope.group_name:
                raise InvalidScopeError(
                    f"Resource group is required to resolve account '{scope.account_name}'",
                    {"account": scope.account_name},
                )
        elif scope.kind == ScopeKind.GROUP and not scope.group_name:
            raise InvalidScopeError("Group scope requires a resource group name")

    def _resolve_account(self, account: AccountHandle, strict: bool) -> Optional[str]:
        hostname = self._lookup.resolve_endpoint_host(account)
        if not hostname:
            if strict or self.endpoint_resolution == EndpointResolutionMode.STRICT:
                raise EndpointUnavailableError(account.name)
            self._logger.warning(
                "Skipping storage account %s: no reachable endpoint", account.name
            )
            return None

        cluster_id = normalize_cluster_id(self._lookup.resolve_cluster_from_host(hostname))
        self._logger.debug("Account %s (%s) is on cluster %s", account.name, hostname, cluster_id)
        return cluster_id
