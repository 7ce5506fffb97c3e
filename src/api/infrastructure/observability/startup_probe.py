"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during process initialization and shutdown.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Any, Protocol

import structlog

DISTRIBUTION_NAME = "synapse-sprint-backend"


def _installed_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def starting(self) -> None:
        """Record that the backend process is starting, with its version."""
        ...

    def repository_initialized(self, name: str) -> None:
        """Record that a repository was constructed and its indexes asserted."""
        ...

    def setup_complete(self, server_port: str) -> None:
        """Record that startup wiring finished."""
        ...

    def startup_failed(self, stage: str, error: BaseException) -> None:
        """Record a fatal startup error that aborts the process."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None):
        self._logger = logger or structlog.get_logger()

    def starting(self) -> None:
        self._logger.info("backend_starting", version=_installed_version())

    def repository_initialized(self, name: str) -> None:
        self._logger.info("repository_initialized", repository=name)

    def setup_complete(self, server_port: str) -> None:
        # No HTTP layer yet; the process exits after wiring.
        self._logger.info(
            "setup_complete",
            server_port=server_port,
            http_server="not_implemented",
        )

    def startup_failed(self, stage: str, error: BaseException) -> None:
        details: dict[str, Any] = {"stage": stage, "error": str(error)}
        if error.__cause__ is not None:
            details["cause"] = repr(error.__cause__)
        self._logger.error("startup_failed", **details)
