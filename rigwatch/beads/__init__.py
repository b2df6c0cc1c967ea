"""
Bead store access for rigwatch.
"""

from .store import BeadsStore, BlockedStore, town_beads_path

__all__ = [
    "BeadsStore",
    "BlockedStore",
    "town_beads_path",
]
