"""
Partner API - Exception Hierarchy
==================================

What:  Application-specific exceptions, each mapped to an HTTP status by the
       global handlers registered in main.py.
Who:   Raised by the partner handler, the upload service and the multipart
       ingestion dependency.

Exception Hierarchy:
    PartnerAPIError (base)
    ├── ValidationError          → 400 Bad Request
    │   └── MalformedUploadError → 400 Bad Request (rejected multipart body)
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PartnerAPIError(Exception):
    """
    Base exception for all Partner API errors.

    Attributes:
        message:  Client-facing error description
        context:  Debug details, logged server-side
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PartnerAPIError):
    """
    Client input failed a business rule (e.g. upload too large).

    HTTP: 400 Bad Request. Request body schema errors are still reported by
    FastAPI itself as 422.
    """

    error_code = "validation_error"

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


class MalformedUploadError(ValidationError):
    """
    A multipart body broke the declared ingestion rules.

    When: a file arrives under an undeclared field name, or a field carries
          more files than its max count. Raised before any file is written
          and before the partner handler runs.
    """

    error_code = "malformed_upload"

    def __init__(
        self,
        message: str = "Malformed multipart upload",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, field=field, context=context)


class NotFoundError(PartnerAPIError):
    """
    The requested resource does not exist.

    When: GET or PATCH /partners/{id} with an id that has no row.
    HTTP: 404 Not Found
    """

    error_code = "not_found"

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


class FileStorageError(PartnerAPIError):
    """
    Writing an uploaded file to the upload directory failed.

    When: disk full, permission denied, repeated filename collisions.
    HTTP: 500 Internal Server Error (file system paths stay in the logs)
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PartnerAPIError):
    """
    A database operation failed unexpectedly.

    HTTP: 500 Internal Server Error. The client always gets a generic message;
    the original error type is kept in `context` for the logs.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
