"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database connection observability.

    This probe captures domain-significant events related to the MongoDB
    client lifecycle without exposing logging implementation details.
    """

    def connecting(self, uri: str) -> None:
        """Record that a connection attempt is starting."""
        ...

    def connection_established(self, uri: str) -> None:
        """Record that the client is connected and the primary answered a ping."""
        ...

    def connection_failed(self, uri: str, error: BaseException) -> None:
        """Record that the client could not be opened."""
        ...

    def ping_failed(self, uri: str, error: BaseException) -> None:
        """Record that the liveness probe against the primary failed."""
        ...

    def disconnecting(self) -> None:
        """Record that the client is being closed."""
        ...

    def connection_closed(self) -> None:
        """Record that the client was closed."""
        ...

    def disconnect_failed(self, error: BaseException) -> None:
        """Record that closing the client failed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def connecting(self, uri: str) -> None:
        self._logger.info(
            "database_connecting",
            uri=uri,
            **self._get_context_kwargs(),
        )

    def connection_established(self, uri: str) -> None:
        self._logger.info(
            "database_connection_established",
            uri=uri,
            **self._get_context_kwargs(),
        )

    def connection_failed(self, uri: str, error: BaseException) -> None:
        self._logger.error(
            "database_connection_failed",
            uri=uri,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def ping_failed(self, uri: str, error: BaseException) -> None:
        self._logger.error(
            "database_ping_failed",
            uri=uri,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def disconnecting(self) -> None:
        self._logger.info(
            "database_disconnecting",
            **self._get_context_kwargs(),
        )

    def connection_closed(self) -> None:
        self._logger.info(
            "database_connection_closed",
            **self._get_context_kwargs(),
        )

    def disconnect_failed(self, error: BaseException) -> None:
        self._logger.error(
            "database_disconnect_failed",
            error=str(error) or type(error).__name__,
            **self._get_context_kwargs(),
        )


class SettingsProbe(Protocol):
    """Domain probe for configuration loading."""

    def loading_configuration(self) -> None:
        """Record that configuration loading started."""
        ...

    def invalid_server_port(self, value: str, default: str) -> None:
        """Record that SERVER_PORT was ignored because it is not a number."""
        ...

    def configuration_loaded(self, server_port: str, mongodb_uri: str) -> None:
        """Record the adopted configuration (credentials already redacted)."""
        ...


class DefaultSettingsProbe:
    """Default implementation of SettingsProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def loading_configuration(self) -> None:
        self._logger.info("configuration_loading")

    def invalid_server_port(self, value: str, default: str) -> None:
        self._logger.warning(
            "invalid_server_port",
            value=value,
            default=default,
        )

    def configuration_loaded(self, server_port: str, mongodb_uri: str) -> None:
        self._logger.info(
            "configuration_loaded",
            server_port=server_port,
            mongodb_uri=mongodb_uri,
        )
