"""Utility modules for rigwatch.

- logging_utils: stderr logging configuration for the CLI
- output: Shared rich consoles (decorated and plain)
- text_formatting: Title truncation for report lines
"""
