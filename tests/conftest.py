"""Global test configuration and fixtures."""

import random
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from storage_placement.config.schemas.placement_schema import PlacementConfig  # noqa: E402
from storage_placement.domain.placement.value_objects import AccountSpec  # noqa: E402
from storage_placement.infrastructure.factories.placement_factory import (  # noqa: E402
    build_placement_services,
)
from tests.fixtures.fake_provider import (  # noqa: E402
    FakeClusterLookup,
    InMemoryStorageProvider,
)


@pytest.fixture
def logger():
    """Mock logger."""
    return Mock()


@pytest.fixture
def provider():
    """In-memory storage provider."""
    return InMemoryStorageProvider()


@pytest.fixture
def lookup():
    """Cluster lookup handing out a fresh cluster per account."""
    return FakeClusterLookup()


@pytest.fixture
def placement_config():
    """Default placement configuration."""
    return PlacementConfig()


@pytest.fixture
def services(provider, lookup, placement_config, logger):
    """Placement services wired around the in-memory provider."""
    return build_placement_services(
        provider, lookup, placement_config, logger=logger, rng=random.Random(1234)
    )


@pytest.fixture
def spec():
    """Account spec used by most placement tests."""
    return AccountSpec(suffix="data", location="eastus")
