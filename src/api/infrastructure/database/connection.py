"""MongoDB connection management.

This module opens the process-wide async MongoDB client, verifies that the
primary is reachable, and closes the client on shutdown.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable

from pymongo import AsyncMongoClient, ReadPreference
from pymongo.errors import PyMongoError

from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability.probes import (
    ConnectionProbe,
    DefaultConnectionProbe,
)
from infrastructure.settings import redact_uri

DEFAULT_CONNECT_TIMEOUT = 10.0
DEFAULT_PING_TIMEOUT = 5.0
DEFAULT_CLEANUP_TIMEOUT = 5.0
DEFAULT_DISCONNECT_TIMEOUT = 10.0


class DatabaseConnector:
    """Opens and closes MongoDB clients with bounded waits.

    The returned client is meant to be shared by every repository in the
    process; only ``disconnect`` retires it.
    """

    def __init__(
        self,
        probe: ConnectionProbe | None = None,
        *,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        ping_timeout: float = DEFAULT_PING_TIMEOUT,
        cleanup_timeout: float = DEFAULT_CLEANUP_TIMEOUT,
        disconnect_timeout: float = DEFAULT_DISCONNECT_TIMEOUT,
        client_factory: Callable[..., AsyncMongoClient[Any]] = AsyncMongoClient,
    ):
        """Initialize the connector.

        Args:
            probe: Optional observability probe
            connect_timeout: Seconds allowed for opening the client
            ping_timeout: Seconds allowed for the liveness ping
            cleanup_timeout: Seconds allowed for closing a client whose ping failed
            disconnect_timeout: Seconds allowed for closing on shutdown
            client_factory: Callable building the client, AsyncMongoClient by default
        """
        self._probe = probe or DefaultConnectionProbe()
        self._connect_timeout = connect_timeout
        self._ping_timeout = ping_timeout
        self._cleanup_timeout = cleanup_timeout
        self._disconnect_timeout = disconnect_timeout
        self._client_factory = client_factory

    async def connect(self, uri: str) -> AsyncMongoClient[Any]:
        """Open a client against ``uri`` and ping the primary.

        Args:
            uri: MongoDB connection string

        Returns:
            A connected client. Datetimes it decodes are timezone-aware UTC.

        Raises:
            DatabaseConnectionError: If the client cannot be opened or the
                primary does not answer the ping in time. The driver error
                is chained as the cause.
        """
        redacted = redact_uri(uri)
        self._probe.connecting(redacted)

        try:
            client = self._client_factory(uri, tz_aware=True)
        except (PyMongoError, ValueError) as e:
            # The URI parser raises plain ValueError for malformed ports.
            self._probe.connection_failed(redacted, e)
            raise DatabaseConnectionError(
                f"Failed to create MongoDB client: {e}"
            ) from e

        try:
            await asyncio.wait_for(client.aconnect(), self._connect_timeout)
        except (PyMongoError, TimeoutError) as e:
            self._probe.connection_failed(redacted, e)
            await self._close_after_failure(client)
            raise DatabaseConnectionError(f"Failed to connect to MongoDB: {e}") from e

        try:
            await asyncio.wait_for(
                client.admin.command("ping", read_preference=ReadPreference.PRIMARY),
                self._ping_timeout,
            )
        except (PyMongoError, TimeoutError) as e:
            self._probe.ping_failed(redacted, e)
            await self._close_after_failure(client)
            raise DatabaseConnectionError(f"MongoDB ping failed: {e}") from e

        self._probe.connection_established(redacted)
        return client

    async def disconnect(self, client: AsyncMongoClient[Any] | None) -> None:
        """Close the client, logging the outcome.

        A ``None`` client is ignored. Errors are logged and never raised,
        shutdown cleanup is best effort.
        """
        if client is None:
            return

        self._probe.disconnecting()
        try:
            await asyncio.wait_for(client.close(), self._disconnect_timeout)
        except Exception as e:
            self._probe.disconnect_failed(e)
            return

        self._probe.connection_closed()

    async def _close_after_failure(self, client: AsyncMongoClient[Any]) -> None:
        """Release a client that failed to come up; the original error wins."""
        try:
            await asyncio.wait_for(client.close(), self._cleanup_timeout)
        except Exception as e:
            self._probe.disconnect_failed(e)
