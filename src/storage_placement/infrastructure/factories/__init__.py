"""Factories wiring services from configuration."""
