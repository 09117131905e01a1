"""Domain errors raised by the listing services and mapped to HTTP in main.py."""


class ListingError(Exception):
    """Base listing error."""


class ListingValidationError(ListingError):
    """Raised when a submission violates a content rule. Carries the first offending field."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ListingForbiddenError(ListingError):
    """Raised when the actor lacks the capability for an operation."""


class ListingNotFoundError(ListingError):
    """Raised when the listing does not exist or is not visible to the viewer."""


class ListingConflictError(ListingError):
    """Raised when an operation violates moderation transition rules."""


class StoreUnavailableError(ListingError):
    """Raised when the listing store fails or cannot be reached."""
