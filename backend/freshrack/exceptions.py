"""
Freshrack Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the failure cases of the API.
How:   Each exception class carries a message and optional context dict.
       Exception handlers (registered in main.py) catch these and return
       `{"success": false, "message": ...}` with the matching HTTP status.
Who:   Raised by services; caught by the handlers in main.py.
When:  During request processing.

Exception Hierarchy:
    FreshrackError (base)          → 500 Internal Server Error
    ├── NotFoundError              → 404 Not Found
    ├── InvalidIdentifierError     → 500 Internal Server Error
    └── DatabaseError              → 500 Internal Server Error

There is deliberately no 400 class: malformed identifiers are reported the
same way as store failures, with the underlying message text.
"""

from typing import Any, Dict, Optional


class FreshrackError(Exception):
    """
    Base exception for all Freshrack application errors.

    Attributes:
        message:  Text returned in the response body's `message` field
        context:  Additional debug info (logged, never returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(FreshrackError):
    """
    Raised when an operation addressed a specific Id and nothing matched.

    When:    GET / PUT / DELETE /api/foods/{id} with a well-formed but unknown Id.
    HTTP:    404 Not Found

    Never raised for list endpoints: an empty filter result is an empty array.
    """

    status_code = 404

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


class InvalidIdentifierError(FreshrackError):
    """
    Raised when a path Id cannot be parsed into the store's UUID type.

    The message is the parser's own message (e.g. "badly formed hexadecimal
    UUID string"), surfaced verbatim with HTTP 500.
    """

    def __init__(
        self,
        message: str = "Invalid identifier",
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if raw_id is not None:
            ctx["raw_id"] = raw_id
        super().__init__(message=message, context=ctx)


class DatabaseError(FreshrackError):
    """
    Raised when a database operation fails (connection lost, constraint,
    type rejected by the driver, ...).

    HTTP:    500 Internal Server Error, message is the driver's error text.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
