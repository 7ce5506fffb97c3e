"""Ports for IAM bounded context: repository protocols and domain errors."""

from iam.ports.exceptions import DuplicateUsernameError, UserNotFoundError
from iam.ports.repositories import IUserRepository

__all__ = [
    "DuplicateUsernameError",
    "IUserRepository",
    "UserNotFoundError",
]
