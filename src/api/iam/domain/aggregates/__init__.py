"""Domain aggregates for IAM context.

Aggregates are the core business objects. They carry state without
depending on infrastructure.
"""

from iam.domain.aggregates.user import User

__all__ = [
    "User",
]
