"""Allow running as python -m storage_placement."""

from storage_placement.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
