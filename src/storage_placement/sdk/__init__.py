"""
Storage placement SDK - programmatic interface for placement-aware account creation.

Usage:
    from storage_placement.config import load_config
    from storage_placement.sdk import StoragePlacementClient

    with StoragePlacementClient.from_config(load_config()) as client:
        accounts = client.place_fleet("data", "rg1", "eastus", count=3)
        duplicates = client.find_duplicate_cluster_assignments("rg1")
"""

from storage_placement.sdk.client import StoragePlacementClient

__all__: list[str] = ["StoragePlacementClient"]
