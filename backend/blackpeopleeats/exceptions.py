"""
BlackPeopleEats Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions mapped to HTTP responses by the
       global handlers registered in main.py.
How:   Each exception carries a user-facing message and an optional context
       dict. Context is logged server-side; only some handlers return it.

Exception Hierarchy:
    BlackPeopleEatsError (base)
    ├── ValidationError          → 400 Bad Request
    ├── DatabaseError            → 500 Internal Server Error (generic message)
    ├── PaymentServiceError      → 500 Internal Server Error (provider message)
    └── HighlightsServiceError   → never reaches HTTP; the fallback wrapper
                                   turns it into the static highlights table
"""

from typing import Any, Dict, Optional


class BlackPeopleEatsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description
        context:  Additional debug info (logged, not always returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlackPeopleEatsError):
    """
    Raised when client input fails validation.

    FastAPI's own RequestValidationError is re-answered in the same 400
    format, so clients see one error kind for every malformed request.

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid request: body.meal_name: Field required",
            "details": {"errors": [...]},
            "request_id": "a1b2c3d4"
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(BlackPeopleEatsError):
    """
    Raised when a store operation fails (constraint violation, lost
    connection, driver error).

    The message returned to the client is always generic; the original
    error type and statement context are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PaymentServiceError(BlackPeopleEatsError):
    """
    Raised when the payment provider rejects or fails a checkout request.

    Unlike DatabaseError the provider's own message is surfaced to the
    client, so a misconfigured key or a declined request is visible in the UI.
    There is no retry and no idempotency key.
    """

    def __init__(
        self,
        message: str = "Could not create a checkout session",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class HighlightsServiceError(BlackPeopleEatsError):
    """
    Raised by a highlights provider when it cannot produce a usable list:
    missing API key, transport failure, unparsable or empty response.

    Callers go through FallbackHighlightsService, which absorbs it.
    """

    def __init__(
        self,
        message: str = "City highlights are unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
