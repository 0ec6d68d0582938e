"""Top level application configuration schema."""

from pydantic import BaseModel, Field

from storage_placement.config.schemas.logging_schema import LoggingConfig
from storage_placement.config.schemas.placement_schema import PlacementConfig
from storage_placement.providers.azure.configuration.config import AzureProviderConfig


class AppConfig(BaseModel):
    """Application configuration."""

    placement: PlacementConfig = Field(default_factory=PlacementConfig)
    azure: AzureProviderConfig = Field(default_factory=AzureProviderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
