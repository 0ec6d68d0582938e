"""Application layer: placement use cases."""
