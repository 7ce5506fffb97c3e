"""Document models for IAM bounded context.

These models describe the MongoDB documents used by repository implementations.
"""

from iam.infrastructure.models.user import USERS_COLLECTION, UserDocument

__all__ = [
    "USERS_COLLECTION",
    "UserDocument",
]
