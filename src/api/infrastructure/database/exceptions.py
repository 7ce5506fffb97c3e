"""Database-specific exceptions and driver error classification.

Everything that knows about MongoDB error codes lives here, so the rest of
the application only deals with its own exception types.
"""

from __future__ import annotations

from pymongo.errors import BulkWriteError, OperationFailure, PyMongoError

# 11000 is the server's duplicate key code; 11001 and 12582 are legacy
# variants still reported by older servers and mongos.
DUPLICATE_KEY_ERROR_CODES = frozenset({11000, 11001, 12582})


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when the database client cannot be opened or does not answer."""

    pass


def is_duplicate_key_error(error: PyMongoError) -> bool:
    """Check whether a driver error reports a unique index violation.

    Args:
        error: Exception raised by pymongo

    Returns:
        True if the server rejected the write because of a duplicate key
    """
    if isinstance(error, BulkWriteError):
        write_errors = (error.details or {}).get("writeErrors", [])
        return any(
            we.get("code") in DUPLICATE_KEY_ERROR_CODES for we in write_errors
        )

    if isinstance(error, OperationFailure):
        return error.code in DUPLICATE_KEY_ERROR_CODES

    return False
