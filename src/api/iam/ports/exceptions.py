"""Domain exceptions for IAM bounded context.

These exceptions represent domain-level errors that can occur during
repository operations. They should be caught and handled by the
application layer.
"""


class DuplicateUsernameError(Exception):
    """Raised when attempting to create a user whose username is taken.

    The unique index on the users collection is the only arbiter: when two
    creates race on the same username, exactly one succeeds and every other
    one raises this error. The application layer should report the name as
    taken rather than treat it as an I/O failure.
    """

    def __init__(self, username: str):
        self.username = username
        super().__init__("username already exists")


class UserNotFoundError(Exception):
    """Raised when a user lookup matches no document.

    Lookups never return None; absence is always this error.
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__("user not found")
