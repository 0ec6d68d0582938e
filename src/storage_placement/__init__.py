"""Storage placement - cluster-aware creation of cloud storage accounts.

Creates storage accounts so that accounts in one resource group land on
distinct physical storage clusters, avoiding correlated failures.

Key Components:
    - domain: value objects, exclusion set, placement policy and ports
    - application: name allocation, cluster resolution and placement services
    - providers: Azure implementations of the ports
    - infrastructure: logging, utilities and service wiring
    - config: configuration schemas and loading
    - cli / interface: command-line entry point and command handlers
    - sdk: programmatic client

Usage:

    >>> storage-placement place-fleet --suffix data --group rg1 --location eastus --count 3
    >>> storage-placement find-duplicates --group rg1
"""

from storage_placement._package import PACKAGE_NAME, __version__

__all__: list[str] = ["PACKAGE_NAME", "__version__"]
