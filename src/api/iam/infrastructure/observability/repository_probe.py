"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def unique_index_ensured(self, field: str) -> None:
        """Record that the unique index on ``field`` exists."""
        ...

    def unique_index_failed(self, field: str, error: BaseException) -> None:
        """Record that the unique index could not be (re)asserted."""
        ...

    def creating_user(self, username: str) -> None:
        """Record that a user insert is about to be attempted."""
        ...

    def user_created(self, user_id: str, username: str) -> None:
        """Record that a user was successfully created."""
        ...

    def duplicate_username(self, username: str) -> None:
        """Record that a create was rejected by the unique index."""
        ...

    def user_create_failed(self, username: str, error: BaseException) -> None:
        """Record that a create failed for a reason other than a duplicate."""
        ...

    def inserted_id_mismatch(self, assigned_id: str, inserted_id: str) -> None:
        """Record that the store echoed a different id than the one assigned."""
        ...

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        ...

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        ...

    def lookup_failed(self, key: str, error: BaseException) -> None:
        """Record that a lookup failed with a store error."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def unique_index_ensured(self, field: str) -> None:
        """Record that the unique index on ``field`` exists."""
        self._logger.info(
            "unique_index_ensured",
            field=field,
            **self._get_context_kwargs(),
        )

    def unique_index_failed(self, field: str, error: BaseException) -> None:
        """Record that the unique index could not be (re)asserted."""
        self._logger.warning(
            "unique_index_failed",
            field=field,
            error=str(error) or type(error).__name__,
            **self._get_context_kwargs(),
        )

    def creating_user(self, username: str) -> None:
        self._logger.debug(
            "creating_user",
            username=username,
            **self._get_context_kwargs(),
        )

    def user_created(self, user_id: str, username: str) -> None:
        """Record that a user was successfully created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def duplicate_username(self, username: str) -> None:
        """Record that a create was rejected by the unique index."""
        self._logger.warning(
            "duplicate_username",
            username=username,
            **self._get_context_kwargs(),
        )

    def user_create_failed(self, username: str, error: BaseException) -> None:
        self._logger.error(
            "user_create_failed",
            username=username,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def inserted_id_mismatch(self, assigned_id: str, inserted_id: str) -> None:
        self._logger.warning(
            "inserted_id_mismatch",
            assigned_id=assigned_id,
            inserted_id=inserted_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        self._logger.debug(
            "username_not_found",
            username=username,
            **self._get_context_kwargs(),
        )

    def lookup_failed(self, key: str, error: BaseException) -> None:
        self._logger.error(
            "user_lookup_failed",
            key=key,
            error=str(error),
            **self._get_context_kwargs(),
        )
