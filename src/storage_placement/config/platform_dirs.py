"""Where configuration and log files live for each kind of install."""

import os
import sys
from pathlib import Path
from typing import Optional

APP_DIR_NAME = "storage-placement"
CONFIG_DIR_ENV = "STORAGE_PLACEMENT_CONFIG_DIR"
LOG_DIR_ENV = "STORAGE_PLACEMENT_LOG_DIR"

# src/storage_placement/config/platform_dirs.py -> checkout root
_CHECKOUT_DEPTH = 3


def in_virtualenv() -> bool:
    return sys.prefix != sys.base_prefix


def is_user_install() -> bool:
    """True for pip install --user."""
    return sys.prefix.startswith(str(Path.home()))


def is_system_install() -> bool:
    return sys.prefix.startswith(("/usr", "/opt"))


def source_checkout_root() -> Optional[Path]:
    """
    Root of the checkout this package is imported from, if any.

    Only this project's own checkout counts: the root must hold a
    pyproject.toml next to src/storage_placement.
    """
    root = Path(__file__).resolve().parents[_CHECKOUT_DEPTH]
    if (root / "pyproject.toml").is_file() and (root / "src" / "storage_placement").is_dir():
        return root
    return None


def get_config_location() -> Path:
    """Get the config directory.

    Priority:
    1. STORAGE_PLACEMENT_CONFIG_DIR environment variable
    2. <checkout>/config when running from this project's source checkout
    3. ~/.local/storage-placement/config for user installs
    4. <prefix>/storage-placement/config for system installs
    5. config/ next to the virtualenv
    6. ./config
    """
    if env_dir := os.environ.get(CONFIG_DIR_ENV):
        return Path(env_dir)

    checkout = source_checkout_root()
    if checkout is not None:
        return checkout / "config"

    if is_user_install():
        return Path.home() / ".local" / APP_DIR_NAME / "config"
    if is_system_install():
        return Path(sys.prefix) / APP_DIR_NAME / "config"
    if in_virtualenv():
        return Path(sys.prefix).parent / "config"
    return Path.cwd() / "config"


def get_logs_location() -> Path:
    """Get the log directory: STORAGE_PLACEMENT_LOG_DIR, else logs/ beside the config dir."""
    if env_dir := os.environ.get(LOG_DIR_ENV):
        return Path(env_dir)
    return get_config_location().parent / "logs"
