"""Package metadata."""

PACKAGE_NAME = "storage-placement"
__version__ = "0.1.0"
