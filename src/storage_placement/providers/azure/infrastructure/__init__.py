"""Azure infrastructure: clients and port adapters."""
