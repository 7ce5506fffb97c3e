"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations live in iam.infrastructure.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User persistence.

    Create and lookup only; users are never updated or deleted through
    this port.
    """

    async def create(self, user: User) -> UserId:
        """Persist a new user.

        Assigns a fresh id and sets created_at/updated_at on ``user``.

        Args:
            user: The User to persist

        Returns:
            The id assigned to the user before insertion

        Raises:
            DuplicateUsernameError: If the username already exists
        """
        ...

    async def find_by_username(self, username: str) -> User:
        """Retrieve a user by their username.

        Args:
            username: The username to search for

        Returns:
            The matching User

        Raises:
            UserNotFoundError: If no user has this username
        """
        ...

    async def find_by_id(self, user_id: UserId) -> User:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The matching User

        Raises:
            UserNotFoundError: If no user has this id
        """
        ...
