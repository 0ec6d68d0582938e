"""Azure provider configuration."""

from typing import Optional

from pydantic import BaseModel, Field


class AzureProviderConfig(BaseModel):
    """Azure subscription, credential and client settings."""

    subscription_id: Optional[str] = Field(None, description="Azure subscription id")
    managed_identity_client_id: Optional[str] = Field(
        None, description="Client id of a user-assigned managed identity"
    )
    operation_timeout_seconds: float = Field(
        300.0, gt=0, description="Timeout for a single management operation"
    )
    connection_timeout_seconds: int = Field(10, gt=0, description="HTTP connect timeout")
    read_timeout_seconds: int = Field(60, gt=0, description="HTTP read timeout")
    retry_total: int = Field(3, ge=0, description="SDK transport retries")
    storage_endpoint_suffix: str = Field(
        "core.windows.net", description="DNS suffix of storage endpoints"
    )
