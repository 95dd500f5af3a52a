"""
Fritter Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for each kind of request failure.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by services and auth dependencies; caught by global handlers.

Exception Hierarchy:
    FritterError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── PayloadTooLargeError     → 413 Payload Too Large
    ├── RateLimitExceededError   → 429 Too Many Requests
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class FritterError(Exception):
    """
    Base exception for all Fritter application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info; returned as `details` only by the
                  handlers of client errors (4xx)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FritterError):
    """
    Raised when client input breaks a business rule.

    When:  Blank content, malformed username or password, empty circle name,
           missing query parameter.
    HTTP:  400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Freet content must be at least one character long.",
            "details": {"field": "content"}
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


class AuthenticationError(FritterError):
    """Raised when sign-in credentials do not match an account. HTTP 401."""

    def __init__(
        self,
        message: str = "Invalid user login credentials provided.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(FritterError):
    """
    Raised when the current session may not perform the action.

    When:  Not signed in, already signed in, modifying another user's freet,
           reply or circle, viewing a private or circle-restricted freet.
    HTTP:  403 Forbidden
    """

    def __init__(
        self,
        message: str = "You are not allowed to perform this action.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(FritterError):
    """
    Raised when a requested resource does not exist.

    Ids that are not valid UUIDs are reported the same way as ids that
    match no row, so clients never see a 422 for a bad path parameter.
    HTTP:  404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource.capitalize()} with ID '{resource_id}' does not exist."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(FritterError):
    """
    Raised when the request would create a duplicate.

    When:  Username taken, freet or reply already liked or reported by the
           user, user already followed, circle name already used.
    HTTP:  409 Conflict
    """

    def __init__(
        self,
        message: str = "The resource already exists.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PayloadTooLargeError(FritterError):
    """Raised when freet or reply content exceeds the length limit. HTTP 413."""

    def __init__(
        self,
        message: str = "Content is too long.",
        max_length: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if max_length is not None:
            ctx["max_length"] = max_length
        super().__init__(message=message, context=ctx)


class DatabaseError(FritterError):
    """
    Raised when database operations fail unexpectedly.

    The message returned to the client is always generic; the context is
    logged server-side only.
    HTTP:  500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(FritterError):
    """
    Raised when a client exceeds the per-IP request rate limit.

    Response includes:
        - retry_after: Seconds until the rate limit window resets
        - Retry-After header for HTTP-compliant clients
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
