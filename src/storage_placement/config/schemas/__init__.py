"""Configuration schemas."""

from storage_placement.config.schemas.app_schema import AppConfig
from storage_placement.config.schemas.logging_schema import LoggingConfig
from storage_placement.config.schemas.placement_schema import (
    EndpointResolutionMode,
    PlacementConfig,
)

__all__: list[str] = ["AppConfig", "EndpointResolutionMode", "LoggingConfig", "PlacementConfig"]
