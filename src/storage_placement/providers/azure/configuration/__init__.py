"""Azure provider configuration."""
