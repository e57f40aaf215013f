"""Marketplace error taxonomy.

Business-rule failures subclass Protean's ``ValidationError`` so they travel
through command processing like any other domain validation failure and map to
HTTP 400. Missing records subclass ``ObjectNotFoundError`` (404). Authorization
failures are a separate family (403) because they are not about the data.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class ItemUnavailable(ValidationError):
    """The product does not exist or is no longer active."""


class InsufficientStock(ValidationError):
    """A tracked product has fewer units than requested."""


class InvalidStatus(ValidationError):
    """The requested order status is not one a seller or admin may set."""


class InvalidTransition(ValidationError):
    """The order's current state does not allow the requested change."""


class DuplicateReview(ValidationError):
    """The buyer already reviewed this product for this order."""


class NotEligible(ValidationError):
    """No delivered order of this buyer contains the product being reviewed."""


class AlreadyVoted(ValidationError):
    """The user already voted on this review."""


class NotFound(ObjectNotFoundError):
    """The requested record does not exist (or is hidden from the requester)."""


class MarketplaceError(Exception):
    """Base for marketplace errors that are not data validation failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AccessDenied(MarketplaceError):
    """The requester lacks the capability for this operation."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(message)


def first_message(exc: Exception) -> str:
    """Flatten a Protean error's ``messages`` dict into a single sentence."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, (list, tuple)) and value:
                return str(value[0])
            if value:
                return str(value)
    return str(exc)
