"""Configuration package."""

from storage_placement.config.loader import load_config
from storage_placement.config.schemas import (
    AppConfig,
    EndpointResolutionMode,
    LoggingConfig,
    PlacementConfig,
)

__all__: list[str] = [
    "AppConfig",
    "EndpointResolutionMode",
    "LoggingConfig",
    "PlacementConfig",
    "load_config",
]
