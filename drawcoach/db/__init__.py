"""Database layer for practice attempt storage."""

from .schema import create_database, get_connection, get_schema_version
from .models import AttemptMetadata, AttemptRecord
from .repository import AttemptRepository

__all__ = [
    "create_database",
    "get_connection",
    "get_schema_version",
    "AttemptMetadata",
    "AttemptRecord",
    "AttemptRepository",
]
