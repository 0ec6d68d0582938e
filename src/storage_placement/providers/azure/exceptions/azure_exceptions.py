"""Azure provider exceptions.

All of them are ProviderErrors so the placement engine treats them alike.
"""

from storage_placement.domain.base.exceptions import ProviderError


class AuthorizationError(ProviderError):
    """Raised when credentials are missing, invalid or lack permission."""


class ProviderEntityNotFoundError(ProviderError):
    """Raised when a resource group or storage account does not exist."""


class RateLimitError(ProviderError):
    """Raised when the provider throttles requests."""


class NetworkError(ProviderError):
    """Raised when the provider cannot be reached."""


class ClusterLookupError(ProviderError):
    """Raised when an endpoint host cannot be mapped to a storage cluster."""
