"""Base class for newsboard domain services."""


class Service:
    """Marker base for domain services.

    Services are built per request scope and share that request's
    repositories, so every write they make lands in one transaction.
    """
