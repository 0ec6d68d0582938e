"""Placement configuration schema."""

from enum import Enum

from pydantic import BaseModel, Field


class EndpointResolutionMode(str, Enum):
    """How multi-account resolution treats accounts without an endpoint."""

    LENIENT = "lenient"
    STRICT = "strict"


class PlacementConfig(BaseModel):
    """Placement engine configuration."""

    max_name_attempts: int = Field(
        3, ge=1, description="Name availability checks before giving up"
    )
    max_placement_attempts: int = Field(
        3, ge=1, description="Account creations per slot before giving up on a cluster"
    )
    name_prefix_length: int = Field(
        8, ge=1, le=21, description="Length of the random account name prefix"
    )
    endpoint_resolution: EndpointResolutionMode = Field(
        EndpointResolutionMode.LENIENT,
        description="Skip (lenient) or fail on (strict) accounts without an endpoint",
    )
    dns_timeout_seconds: float = Field(
        10.0, gt=0, description="Timeout for a single cluster DNS lookup"
    )
    pending_tag_key: str = Field(
        "placement-state", description="Tag marking accounts not yet accepted"
    )
    run_tag_key: str = Field("placement-run", description="Tag holding the placement run id")
