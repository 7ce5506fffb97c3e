"""User aggregate for IAM context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from iam.domain.value_objects import Role, UserId


@dataclass
class User:
    """User account as persisted in the users collection.

    ``id`` and the timestamps are left unset by callers and filled in by the
    repository when the user is created. The password is only ever held as
    an opaque hash.
    """

    username: str
    password_hash: str
    role: Role
    id: UserId | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    def __repr__(self) -> str:
        """Keep the password hash out of reprs and logs."""
        return (
            f"User(id={self.id!s}, username={self.username!r}, "
            f"role={str(self.role)!r})"
        )
