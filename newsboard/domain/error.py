"""Domain layer errors.

All of these are expected, recoverable conditions. Store failures are not
wrapped and propagate as raised by SQLAlchemy.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed input (title, url, lengths, username...)."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on content outside the edit/delete policy."""

    def __init__(self, resource: str, resource_id: str, user_id: str | None):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ContentDeletedException(DomainError):
    """Raised when attempting to edit deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot edit deleted {resource} {resource_id}")


class RateLimitedError(DomainError):
    """Raised when a cooldown is active for the requested action."""

    def __init__(self, action: str, retry_after: int):
        self.action = action
        self.retry_after = retry_after
        super().__init__(f"Rate limited on {action}, retry in {retry_after} seconds")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
