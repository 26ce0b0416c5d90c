"""
Kacchi Likhavat Backend — Custom Exception Hierarchy
=====================================================

What:  Application-specific exceptions for the error categories the API exposes.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the `{success: false, message, ...}` envelope with the
       matching HTTP status code.
Who:   Raised by services and the auth gate; caught by global handlers.

Exception Hierarchy:
    LikhavatError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    └── DatabaseError            → 500 Internal Server Error

Ownership note:
    A record that exists but belongs to another user is reported as
    NotFoundError, never PermissionDeniedError. PermissionDeniedError is
    reserved for the profile endpoints, where the id in the path is the
    user id itself.
"""

from typing import Any, Dict, Optional


class LikhavatError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged; only some handlers return it)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LikhavatError):
    """
    Raised when client input fails validation.

    When:    Missing required fields, bad enum values, malformed dates,
             a search without `q` or `tag`.
    HTTP:    400 Bad Request
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


class AuthenticationError(LikhavatError):
    """
    Raised when the bearer credential is missing, malformed, expired,
    or signed with the wrong key, and when login credentials are wrong.

    HTTP:    401 Unauthorized (with `WWW-Authenticate: Bearer`)
    """

    def __init__(
        self,
        message: str = "Authentication failed. Please try logging in again",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(LikhavatError):
    """
    Raised when an authenticated user addresses another user's profile.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        message: str = "You do not have permission to perform this action",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(LikhavatError):
    """
    Raised when no record with the given id exists for the caller.

    HTTP:    404 Not Found

    SQLAlchemy returns None for missing records (not an exception).
    Services convert None → NotFoundError so routes stay free of checks.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class DatabaseError(LikhavatError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, deadlock, pool exhaustion, etc.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
