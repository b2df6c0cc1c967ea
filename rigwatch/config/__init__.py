"""Configuration for rigwatch."""
