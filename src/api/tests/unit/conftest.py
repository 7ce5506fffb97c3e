"""Unit test fixtures with mocked dependencies."""

import asyncio
from typing import Any
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from pymongo.results import InsertOneResult

from infrastructure.settings import get_settings

SETTINGS_ENV_VARS = ("SERVER_PORT", "MONGODB_URI", "MONGODB_DATABASE", "LOG_LEVEL")


@pytest.fixture(autouse=True)
def isolated_settings_env(monkeypatch, tmp_path):
    """Run each test without inherited settings env vars or a stray .env file."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeUsersCollection:
    """In-memory users collection enforcing a unique username index.

    Inserts are serialized the way the server serializes writes against a
    unique index, so racing inserts of one username produce one winner.
    """

    def __init__(self) -> None:
        self.documents: dict[ObjectId, dict[str, Any]] = {}
        self.indexes: list[tuple[Any, dict[str, Any]]] = []
        self._write_lock = asyncio.Lock()

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        self.indexes.append((keys, kwargs))
        return "username_1"

    async def insert_one(self, document: dict[str, Any]) -> InsertOneResult:
        async with self._write_lock:
            # yield so that concurrent callers actually interleave
            await asyncio.sleep(0)
            for existing in self.documents.values():
                if existing["username"] == document["username"]:
                    raise DuplicateKeyError(
                        "E11000 duplicate key error collection: users "
                        f"index: username_1 dup key: {{ username: \"{document['username']}\" }}",
                        code=11000,
                    )
            self.documents[document["_id"]] = dict(document)
        return InsertOneResult(document["_id"], acknowledged=True)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        for document in self.documents.values():
            if all(document.get(key) == value for key, value in query.items()):
                return dict(document)
        return None


@pytest.fixture
def fake_users_collection() -> FakeUsersCollection:
    """Provide an empty in-memory users collection."""
    return FakeUsersCollection()


@pytest.fixture
def mock_database(fake_users_collection):
    """Provide a database mock whose users collection is the in-memory fake."""
    database = MagicMock()
    database.__getitem__.return_value = fake_users_collection
    return database
