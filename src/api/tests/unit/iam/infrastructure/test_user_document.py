"""Unit tests for the users collection document model."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from iam.domain.aggregates import User
from iam.domain.value_objects import Role, UserId
from iam.infrastructure.models import UserDocument

CREATED = datetime(2024, 5, 1, 12, 30, 0, 123000, tzinfo=timezone.utc)


@pytest.fixture
def user():
    """Create a user as the repository leaves it after assigning fields."""
    return User(
        id=UserId.generate(),
        username="alice",
        password_hash="$2b$12$abcdefghijklmnopqrstuv",
        role=Role.STUDENT,
        created_at=CREATED,
        updated_at=CREATED,
    )


class TestToMongo:
    """Tests for the persisted document shape."""

    def test_uses_store_field_names(self, user):
        document = UserDocument.from_domain(user).to_mongo()

        assert document == {
            "_id": user.id.value,
            "username": "alice",
            "passwordHash": "$2b$12$abcdefghijklmnopqrstuv",
            "role": "student",
            "createdAt": CREATED,
            "updatedAt": CREATED,
        }

    def test_role_is_stored_as_plain_string(self, user):
        document = UserDocument.from_domain(user).to_mongo()
        assert type(document["role"]) is str

    def test_requires_assigned_id(self):
        unsaved = User(username="bob", password_hash="hash", role=Role.ADMIN)
        with pytest.raises(ValueError):
            UserDocument.from_domain(unsaved)


class TestToDomain:
    """Tests for reading documents back."""

    def test_reads_stored_document(self):
        object_id = ObjectId()
        document = {
            "_id": object_id,
            "username": "carol",
            "passwordHash": "hash",
            "role": "parent",
            "createdAt": CREATED,
            "updatedAt": CREATED,
        }

        user = UserDocument.model_validate(document).to_domain()

        assert user.id == UserId(value=object_id)
        assert user.username == "carol"
        assert user.role is Role.PARENT
        assert user.created_at == CREATED

    def test_ignores_fields_outside_the_model(self, user):
        document = UserDocument.from_domain(user).to_mongo()
        document["legacyField"] = 1

        assert UserDocument.model_validate(document).to_domain() == user
