"""CLI entry point."""

import argparse
import sys
from typing import Callable, Optional

from storage_placement._package import __version__
from storage_placement.cli.console import print_error, print_json, set_console_enabled
from storage_placement.config.loader import load_config
from storage_placement.domain.base.exceptions import PlacementError
from storage_placement.domain.placement.value_objects import AccessTier, AccountKind, SkuName
from storage_placement.infrastructure.logging.logger import get_logger, setup_logging
from storage_placement.interface.placement_command_handlers import (
    COMMAND_HANDLERS,
    format_placed,
)
from storage_placement.sdk.client import StoragePlacementClient

logger = get_logger(__name__)

ClientFactory = Callable[..., StoragePlacementClient]


def _add_account_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--suffix", required=True, help="Fixed tail of every account name")
    parser.add_argument("--group", required=True, help="Resource group")
    parser.add_argument("--location", required=True, help="Azure region, e.g. eastus")
    parser.add_argument(
        "--sku", default=SkuName.STANDARD_LRS.value, choices=[s.value for s in SkuName]
    )
    parser.add_argument(
        "--kind", default=AccountKind.STORAGE.value, choices=[k.value for k in AccountKind]
    )
    parser.add_argument("--access-tier", choices=[t.value for t in AccessTier])


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="storage-placement",
        description="Create storage accounts on distinct physical storage clusters",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="Path to JSON config file")
    parser.add_argument("--log-level", help="Override configured log level")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")

    commands = parser.add_subparsers(dest="command", required=True)

    fleet = commands.add_parser("place-fleet", help="Place several accounts on distinct clusters")
    _add_account_arguments(fleet)
    fleet.add_argument("--count", type=int, default=3, help="Number of accounts")
    fleet.add_argument(
        "--validate-existing",
        action="store_true",
        help="Fail if existing accounts in the group already share a cluster",
    )
    fleet.add_argument(
        "--avoid-existing",
        action="store_true",
        help="Avoid clusters already used by accounts in the group",
    )

    account = commands.add_parser("place-account", help="Place one account")
    _add_account_arguments(account)
    account.add_argument(
        "--exclude", action="append", metavar="CLUSTER", help="Cluster to avoid (repeatable)"
    )

    clusters = commands.add_parser("list-clusters", help="Show the cluster of each account")
    clusters.add_argument("--group", help="Resource group; all accounts when omitted")
    clusters.add_argument("--account", help="Single account name (requires --group)")

    duplicates = commands.add_parser(
        "find-duplicates", help="List accounts sharing a cluster in a group"
    )
    duplicates.add_argument("--group", required=True)

    reconcile = commands.add_parser(
        "reconcile", help="Delete accounts left pending by an interrupted placement"
    )
    reconcile.add_argument("--group", required=True)
    reconcile.add_argument("--dry-run", action="store_true")

    return parser


def main(
    argv: Optional[list[str]] = None,
    client_factory: ClientFactory = StoragePlacementClient.from_config,
) -> int:
    """
    Run the CLI.

    Returns:
        0 on success, 1 on any placement error
    """
    args = build_parser().parse_args(argv)
    if args.quiet:
        set_console_enabled(False)

    try:
        config = load_config(args.config)
    except PlacementError as e:
        return _report_error(e)

    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config.logging)

    try:
        with client_factory(config) as client:
            result = COMMAND_HANDLERS[args.command](args, client)
    except PlacementError as e:
        logger.error("Command %s failed: %s", args.command, e)
        return _report_error(e)

    print_json(result)
    return 0


def _report_error(error: PlacementError) -> int:
    print_error(str(error))
    output = error.to_dict()
    if error.placed_accounts:
        output["accounts"] = format_placed(list(error.placed_accounts))
    print_json(output)
    return 1


def cli_main() -> None:
    """Entry point function for console scripts."""
    sys.exit(main())


if __name__ == "__main__":
    cli_main()
