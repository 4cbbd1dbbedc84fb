"""Domain errors raised by the service layer.

Routers and the global error handlers translate these into HTTP responses.
"""


class NotFoundError(LookupError):
    """The requested entity or result set does not exist."""


class ConflictError(ValueError):
    """A uniqueness constraint would be violated."""


class InvalidCredentialsError(ValueError):
    """Unknown username or wrong password."""
