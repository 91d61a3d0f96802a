"""Domain layer: geometry, path model and services."""
