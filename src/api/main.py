"""Backend process entry point.

Loads configuration, connects to MongoDB and wires the repositories. There
is no HTTP layer yet, so the process exits once wiring succeeds.
"""

from __future__ import annotations

import asyncio
import sys

from iam.infrastructure.user_repository import MongoUserRepository
from infrastructure.database.connection import DatabaseConnector
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import Settings, get_settings


async def main(
    connector: DatabaseConnector | None = None,
    probe: StartupProbe | None = None,
) -> int:
    """Run startup wiring.

    Returns:
        Process exit status: 0 when wiring succeeded, 1 when the database
        could not be reached.
    """
    probe = probe or DefaultStartupProbe()
    connector = connector or DatabaseConnector()

    probe.starting()
    settings = get_settings()

    try:
        client = await connector.connect(settings.mongodb_uri)
    except DatabaseConnectionError as e:
        probe.startup_failed("database_connection", e)
        return 1

    try:
        database = client[settings.mongodb_database]

        user_repository = MongoUserRepository(database)
        await user_repository.ensure_indexes()
        probe.repository_initialized("users")

        # TODO: build the account service on top of user_repository and
        # serve it over HTTP on settings.server_port.
        probe.setup_complete(settings.server_port)
    finally:
        await connector.disconnect(client)

    return 0


def run() -> None:
    """Console script entry point."""
    configure_logging(Settings().log_level)
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
