"""Document model for the users collection.

Maps the User aggregate to the camelCase document shape stored in MongoDB.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field

from iam.domain.aggregates import User
from iam.domain.value_objects import Role, UserId

USERS_COLLECTION = "users"


class UserDocument(BaseModel):
    """Persisted shape of a user.

    Collection: "users"; ``username`` carries a unique index.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        use_enum_values=True,
    )

    id: ObjectId = Field(alias="_id")
    username: str
    password_hash: str = Field(alias="passwordHash")
    role: Role
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, user: User) -> UserDocument:
        """Build the document for a user whose id and timestamps are set."""
        if user.id is None or user.created_at is None or user.updated_at is None:
            raise ValueError(f"{user} has no id or timestamps assigned")

        return cls(
            id=user.id.value,
            username=user.username,
            password_hash=user.password_hash,
            role=user.role,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_domain(self) -> User:
        """Convert back into the User aggregate."""
        return User(
            id=UserId(value=self.id),
            username=self.username,
            password_hash=self.password_hash,
            role=Role(self.role),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def to_mongo(self) -> dict[str, Any]:
        """Serialize with store field names, ready for insert_one."""
        return self.model_dump(by_alias=True)
