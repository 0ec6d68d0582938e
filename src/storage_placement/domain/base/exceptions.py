"""
Placement error taxonomy.

Error types are separated so callers can react correctly:
NameExhaustedError and PreexistingCollisionError abort a whole run.
ClusterExclusionExhaustedError only loses one fleet slot.
ProviderError wraps every failure of the underlying cloud provider and is
never swallowed.
"""

from typing import Any, Optional


class PlacementError(Exception):
    """Base class for all placement exceptions."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        # Accounts committed before the error aborted a fleet run.
        self.placed_accounts: tuple = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for CLI and API output."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PlacementError):
    """Raised when configuration cannot be loaded or is invalid."""


class InvalidAccountSpecError(PlacementError):
    """Raised when placement arguments fail validation."""


class NameExhaustedError(PlacementError):
    """Raised when no available account name was found within the attempt budget."""

    def __init__(self, suffix: str, attempts: int, candidates: list[str]) -> None:
        super().__init__(
            f"No available account name for suffix '{suffix}' after {attempts} attempts",
            {"suffix": suffix, "attempts": attempts, "candidates": candidates},
        )
        self.suffix = suffix
        self.attempts = attempts
        self.candidates = candidates


class ClusterExclusionExhaustedError(PlacementError):
    """Raised when every placement attempt landed on an excluded cluster."""

    def __init__(self, attempts: int, clusters: list[str]) -> None:
        super().__init__(
            f"Account landed on an excluded cluster in all {attempts} attempts",
            {"attempts": attempts, "clusters": clusters},
        )
        self.attempts = attempts
        self.clusters = clusters


class PreexistingCollisionError(PlacementError):
    """Raised when accounts already in a group share a cluster."""

    def __init__(self, group_name: str, duplicates: list) -> None:
        super().__init__(
            f"Resource group '{group_name}' already has {len(duplicates)} accounts "
            "sharing a storage cluster",
            {
                "group": group_name,
                "duplicates": [(d.account_name, d.cluster_id) for d in duplicates],
            },
        )
        self.group_name = group_name
        self.duplicates = duplicates


class NoAccountsFoundError(PlacementError):
    """Raised when a resolution scope matches no storage accounts."""


class InvalidScopeError(PlacementError):
    """Raised when a single-account scope is given without its resource group."""


class EndpointUnavailableError(PlacementError):
    """Raised when an account has no endpoint host to resolve its cluster from."""

    def __init__(self, account_name: str) -> None:
        super().__init__(
            f"Storage account '{account_name}' has no reachable endpoint",
            {"account": account_name},
        )
        self.account_name = account_name


class ProviderError(PlacementError):
    """Raised when an underlying provider operation fails."""

    def __init__(
        self,
        message: str,
        operation: str = "unknown",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, {"operation": operation, **(details or {})})
        self.operation = operation


class ProviderTimeoutError(ProviderError):
    """Raised when a provider operation exceeds its timeout."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(
            f"Provider operation '{operation}' timed out after {timeout}s",
            operation,
            {"timeout_seconds": timeout},
        )
        self.timeout = timeout
