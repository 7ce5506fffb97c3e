"""Integration test fixtures for database tests.

These fixtures require a running MongoDB reachable at MONGODB_URI
(default mongodb://localhost:27017). Tests are skipped when none answers.
For concurrency tests the server must support unique indexes (any
standalone or replica set does).
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from infrastructure.database.connection import DatabaseConnector
from infrastructure.database.exceptions import DatabaseConnectionError


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires MongoDB)",
    )


@pytest.fixture(scope="session")
def integration_mongodb_uri() -> str:
    """Connection string for integration tests.

    Override with the MONGODB_URI environment variable.
    """
    return os.getenv("MONGODB_URI", "mongodb://localhost:27017")


@pytest.fixture
def connector() -> DatabaseConnector:
    """Connector with short budgets so a missing server skips quickly."""
    return DatabaseConnector(connect_timeout=3.0, ping_timeout=3.0)


@pytest_asyncio.fixture
async def mongo_client(
    connector: DatabaseConnector, integration_mongodb_uri: str
) -> AsyncGenerator[AsyncMongoClient[Any], None]:
    """Provide a connected client, skipping the test if MongoDB is down."""
    try:
        client = await connector.connect(integration_mongodb_uri)
    except DatabaseConnectionError as e:
        pytest.skip(f"MongoDB not available: {e}")

    yield client
    await connector.disconnect(client)


@pytest_asyncio.fixture
async def clean_database(
    mongo_client: AsyncMongoClient[Any],
) -> AsyncGenerator[AsyncDatabase[dict[str, Any]], None]:
    """Provide a throwaway database, dropped after the test."""
    name = f"synapse_sprint_test_{ObjectId()}"
    yield mongo_client[name]
    await mongo_client.drop_database(name)
