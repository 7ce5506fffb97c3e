"""Value objects for IAM domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from bson import ObjectId


@dataclass(frozen=True)
class UserId:
    """Identifier for a User.

    Wraps the document store's native ObjectId so ids generated by the
    application and ids assigned by the store are interchangeable.
    """

    value: ObjectId

    def __str__(self) -> str:
        """Return the 24 character hex representation."""
        return str(self.value)

    @classmethod
    def generate(cls) -> UserId:
        """Generate a new, globally unique UserId."""
        return cls(value=ObjectId())

    @classmethod
    def from_string(cls, value: str) -> UserId:
        """Create UserId from its hex string form.

        Args:
            value: 24 character hex string

        Returns:
            UserId instance

        Raises:
            ValueError: If value is not a valid ObjectId
        """
        if not ObjectId.is_valid(value):
            raise ValueError(f"Invalid UserId: {value}")

        return cls(value=ObjectId(value))


class Role(StrEnum):
    """Account roles.

    The set is closed; persisted documents store the lowercase value.
    """

    STUDENT = "student"
    PARENT = "parent"
    ADMIN = "admin"
