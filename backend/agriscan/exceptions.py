"""
AgriScan Backend - Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions mapped to HTTP responses.
How:   Each exception carries a caller-safe message and an optional context
       dict. Global handlers in main.py turn them into `{"error": message}`
       bodies; the context is logged and never returned.
Who:   Raised by routes and services; caught by the global handlers.

Exception Hierarchy:
    AgriScanError (base)       → 500 Internal Server Error
    ├── ValidationError        → 400 Bad Request
    └── StorageError           → 500 Internal Server Error

Failures of the Gemini call are deliberately absent: the AI client turns
them into fixed human-readable answers instead of raising.
"""

from typing import Any, Dict, Optional


class AgriScanError(Exception):
    """
    Base exception for all AgriScan application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AgriScanError):
    """
    Raised when a required request field is missing.

    HTTP:    400 Bad Request

    Example response:
        {"error": "Prompt is required"}
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


class StorageError(AgriScanError):
    """
    Raised when the document store fails to read or write.

    HTTP:    500 Internal Server Error

    The message is the fixed, endpoint-specific text returned to the client
    ("Failed to save scan report.", "Failed to fetch farm data."). The
    underlying exception type and text live in `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
