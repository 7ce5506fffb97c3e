"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    is_duplicate_key_error,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "is_duplicate_key_error",
]
