"""
Cash Card Service — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internals.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and the security dependency; caught by global handlers.

Exception Hierarchy:
    CashCardError (base)
    ├── ValidationError      → 400 Bad Request (client can fix)
    ├── UnauthorizedError    → 401 Unauthorized (missing or bad credentials)
    ├── ForbiddenError       → 403 Forbidden (authenticated, wrong role)
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CashCardError(Exception):
    """
    Base exception for all Cash Card service errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only where the handler says so)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(CashCardError):
    """
    Raised when client input fails validation.

    When:    Negative amount, unknown sort field, malformed body or query.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Unsupported sort field 'owner'",
            "details": {"field": "sort", "allowed": ["amount", "id"]}
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


class UnauthorizedError(CashCardError):
    """
    Raised when the caller presents no credentials or credentials that fail.

    HTTP:    401 Unauthorized, with a WWW-Authenticate challenge.

    Returned regardless of whether the requested card exists, so an
    anonymous caller learns nothing about the store.
    """

    def __init__(
        self,
        message: str = "Valid credentials are required to access this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(CashCardError):
    """
    Raised when an authenticated user lacks the role the endpoint requires.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have permission to access this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(CashCardError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE /cashcards/{id} with an id that was never issued,
             was deleted, or belongs to another owner.
    HTTP:    404 Not Found

    The repository returns None for missing rows; the service layer converts
    that into this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(CashCardError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation, locked database.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic; the SQL error is
    logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
