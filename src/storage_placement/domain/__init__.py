"""Placement domain: value objects, exclusion set, policy and ports."""
