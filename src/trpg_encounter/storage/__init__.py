"""Storage module for campaign persistence.

Provides SQLite-based storage for campaigns, their characters and their
encounters.
"""

from trpg_encounter.storage.database import Database

__all__ = [
    "Database",
]
