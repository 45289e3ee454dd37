"""Error types raised while producing a quote."""

from __future__ import annotations


class QuoteError(Exception):
    """Base class for quote failures that are reported back to the caller."""

    error = "Quote failed"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.error, "detail": self.message}


class QuoteValidationError(QuoteError, ValueError):
    """Required request fields are missing or malformed."""

    error = "Invalid request"


class RoutingError(QuoteError):
    """The directions provider could not produce a distance for the route."""

    error = "Routing failed"


class ConfigurationError(QuoteError):
    """The pricing document could not be read or failed validation."""

    error = "Pricing configuration error"
