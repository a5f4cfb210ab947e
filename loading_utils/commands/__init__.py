"""CLI command groups for loading-utils."""
