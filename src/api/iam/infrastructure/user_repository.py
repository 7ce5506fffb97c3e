"""MongoDB implementation of IUserRepository.

Thin data-access layer over the users collection. Username uniqueness is
enforced by a unique index; this repository only translates the store's
duplicate-key and no-document signals into domain errors.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

from pymongo import ASCENDING
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId
from iam.infrastructure.models import USERS_COLLECTION, UserDocument
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateUsernameError, UserNotFoundError
from iam.ports.repositories import IUserRepository
from infrastructure.database.exceptions import is_duplicate_key_error

INDEX_TIMEOUT = 10.0


def _utc_now() -> datetime:
    """Current UTC time truncated to BSON datetime (millisecond) precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MongoUserRepository(IUserRepository):
    """MongoDB-backed repository for User aggregates.

    Holds only the database handle, the collection handle and a probe, none
    of which change after construction, so one instance can serve any number
    of concurrent tasks.
    """

    def __init__(
        self,
        database: AsyncDatabase[dict[str, Any]],
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database handle and probe.

        Call ``ensure_indexes`` once after construction.

        Args:
            database: Database holding the users collection
            probe: Optional domain probe for observability
        """
        self._database = database
        self._collection: AsyncCollection[dict[str, Any]] = database[USERS_COLLECTION]
        self._probe = probe or DefaultUserRepositoryProbe()

    async def ensure_indexes(self, timeout: float = INDEX_TIMEOUT) -> None:
        """Assert the unique index on username.

        Failure (permissions, conflicting index, timeout) is logged as a
        warning and swallowed; the repository keeps working and relies on
        the index having been created earlier.
        """
        try:
            await asyncio.wait_for(
                self._collection.create_index(
                    [("username", ASCENDING)],
                    unique=True,
                ),
                timeout,
            )
        except (PyMongoError, TimeoutError) as e:
            self._probe.unique_index_failed("username", e)
            return

        self._probe.unique_index_ensured("username")

    async def create(self, user: User) -> UserId:
        """Insert a new user.

        Sets ``user.created_at``/``user.updated_at`` to the same instant and
        assigns ``user.id`` before the insert.

        Args:
            user: The User to persist

        Returns:
            The id assigned before the insert

        Raises:
            DuplicateUsernameError: If the username already exists
            PyMongoError: Any other store failure, unchanged
        """
        self._probe.creating_user(user.username)

        now = _utc_now()
        user.created_at = now
        user.updated_at = now
        user.id = UserId.generate()

        document = UserDocument.from_domain(user).to_mongo()
        try:
            result = await self._collection.insert_one(document)
        except PyMongoError as e:
            if is_duplicate_key_error(e):
                self._probe.duplicate_username(user.username)
                raise DuplicateUsernameError(user.username) from e
            self._probe.user_create_failed(user.username, e)
            raise

        if result.inserted_id != user.id.value:
            self._probe.inserted_id_mismatch(str(user.id), str(result.inserted_id))

        self._probe.user_created(str(user.id), user.username)
        return user.id

    async def find_by_username(self, username: str) -> User:
        """Retrieve a user by their username.

        Args:
            username: The username to search for

        Returns:
            The matching User

        Raises:
            UserNotFoundError: If no user has this username
            TypeError: If username is not a plain string
        """
        if not isinstance(username, str):
            # Anything else would be read as a query operator document.
            raise TypeError(
                f"username must be str, not {type(username).__name__}"
            )

        try:
            document = await self._collection.find_one({"username": username})
        except PyMongoError as e:
            self._probe.lookup_failed(username, e)
            raise

        if document is None:
            self._probe.username_not_found(username)
            raise UserNotFoundError(username)

        user = UserDocument.model_validate(document).to_domain()
        self._probe.user_retrieved(str(user.id))
        return user

    async def find_by_id(self, user_id: UserId) -> User:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The matching User

        Raises:
            UserNotFoundError: If no user has this id
        """
        try:
            document = await self._collection.find_one({"_id": user_id.value})
        except PyMongoError as e:
            self._probe.lookup_failed(str(user_id), e)
            raise

        if document is None:
            self._probe.user_not_found(str(user_id))
            raise UserNotFoundError(str(user_id))

        self._probe.user_retrieved(str(user_id))
        return UserDocument.model_validate(document).to_domain()
