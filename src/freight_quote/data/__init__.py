"""Configuration data loaders."""
