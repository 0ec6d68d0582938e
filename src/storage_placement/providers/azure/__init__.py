"""Azure storage provider."""
