"""CLI command modules for rigwatch."""
