"""Interface layer: command handlers."""
