"""
Resource loading - static game data from JSON.
"""

from bestmen_engine.resources.database import Database, DataValidationError

__all__ = [
    "Database",
    "DataValidationError",
]
