"""Azure provider exceptions."""
