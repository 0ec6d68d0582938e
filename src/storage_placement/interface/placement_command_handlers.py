"""Placement command handlers for the interface layer."""

from typing import TYPE_CHECKING, Any

from storage_placement.cli.console import print_info, print_success, print_warning
from storage_placement.domain.placement.value_objects import ClusterAssignment, PlacedAccount
from storage_placement.sdk.client import StoragePlacementClient

if TYPE_CHECKING:
    import argparse


def format_placed(accounts: list[PlacedAccount]) -> list[dict[str, Any]]:
    return [{"name": a.name, "cluster_id": a.cluster_id} for a in accounts]


def format_assignments(assignments: list[ClusterAssignment]) -> list[dict[str, Any]]:
    return [{"account_name": a.account_name, "cluster_id": a.cluster_id} for a in assignments]


def handle_place_fleet(
    args: "argparse.Namespace", client: StoragePlacementClient
) -> dict[str, Any]:
    """
    Handle fleet placement.

    Args:
        args: Parsed arguments with suffix, group, location, sku, kind, count
        client: Placement client

    Returns:
        Placed accounts and the requested count
    """
    print_info(
        f"Placing {args.count} storage accounts with suffix '{args.suffix}' in {args.group}"
    )
    accounts = client.place_fleet(
        args.suffix,
        args.group,
        args.location,
        sku=args.sku,
        kind=args.kind,
        count=args.count,
        validate_existing=args.validate_existing,
        avoid_existing_clusters=args.avoid_existing,
        access_tier=args.access_tier,
    )
    if len(accounts) < args.count:
        print_warning(f"Placed {len(accounts)} of {args.count} requested accounts")
    else:
        print_success(f"Placed {len(accounts)} accounts on distinct clusters")
    return {"requested": args.count, "accounts": format_placed(accounts)}


def handle_place_account(
    args: "argparse.Namespace", client: StoragePlacementClient
) -> dict[str, Any]:
    """Handle single account placement."""
    account = client.place_account(
        args.suffix,
        args.group,
        args.location,
        sku=args.sku,
        kind=args.kind,
        exclude_clusters=args.exclude or (),
        access_tier=args.access_tier,
    )
    print_success(f"Created storage account {account.name}")
    return {"account": format_placed([account])[0]}


def handle_list_clusters(
    args: "argparse.Namespace", client: StoragePlacementClient
) -> dict[str, Any]:
    """Handle cluster listing for an account, a group or the subscription."""
    if args.account:
        assignments = client.list_clusters_for_account(args.group, args.account)
    elif args.group:
        assignments = client.list_clusters_in_group(args.group)
    else:
        assignments = client.list_clusters_in_subscription()
    return {"clusters": format_assignments(assignments)}


def handle_find_duplicates(
    args: "argparse.Namespace", client: StoragePlacementClient
) -> dict[str, Any]:
    """Handle duplicate cluster detection."""
    duplicates = client.find_duplicate_cluster_assignments(args.group)
    if duplicates:
        print_warning(f"{len(duplicates)} accounts in {args.group} share a cluster")
    else:
        print_success(f"Every account in {args.group} is on a distinct cluster")
    return {"duplicates": format_assignments(duplicates)}


def handle_reconcile(
    args: "argparse.Namespace", client: StoragePlacementClient
) -> dict[str, Any]:
    """Handle orphan cleanup."""
    names = client.reconcile_orphans(args.group, dry_run=args.dry_run)
    if names and not args.dry_run:
        print_success(f"Deleted {len(names)} orphaned accounts")
    return {"orphans": names, "deleted": not args.dry_run}


COMMAND_HANDLERS = {
    "place-fleet": handle_place_fleet,
    "place-account": handle_place_account,
    "list-clusters": handle_list_clusters,
    "find-duplicates": handle_find_duplicates,
    "reconcile": handle_reconcile,
}
