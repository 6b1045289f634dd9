"""Domain-level exception hierarchy."""


class DomainError(Exception):
    """Base exception for service-layer errors."""

    def __init__(self, message: str = "Domain error") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Raised when input fails validation rules."""


class StoreReadError(DomainError):
    """Raised when the record store cannot be read (error or timeout).

    The message is safe to show to API callers; the underlying cause is
    chained via ``__cause__`` and only logged.
    """

    def __init__(self, message: str = "Failed to fetch advocates") -> None:
        super().__init__(message)


class CacheUnavailable(DomainError):
    """Raised by cache backends when their storage cannot be reached."""
