"""
Custom exception classes for the application.

Hard failures abort an import atomically. Soft issues (missing or extra
columns, unparseable identifiers) are never raised; they are reported.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "CATALOG_EMPTY_FILE")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# IMPORT ERRORS
# ===================

class EmptyFileError(ValidationError):
    """Upload contained no data rows."""

    def __init__(self, source: Optional[str] = None):
        super().__init__(
            code="CATALOG_EMPTY_FILE",
            message="The file contains no rows",
            details={"source": source} if source else None
        )


class DecodeError(ValidationError):
    """Spreadsheet could not be turned into rows."""

    def __init__(
        self,
        message: str = "Failed to read spreadsheet",
        details: Optional[dict] = None
    ):
        super().__init__(
            code="CATALOG_DECODE_FAILED",
            message=message,
            details=details
        )


class UnsupportedFileTypeError(ValidationError):
    """Upload extension is not a supported spreadsheet format."""

    def __init__(self, filename: str, supported: list[str]):
        super().__init__(
            code="CATALOG_UNSUPPORTED_FILE_TYPE",
            message="File type not supported, upload a .csv or .xlsx file",
            details={"filename": filename, "supported": supported}
        )


class FileTooLargeError(ValidationError):
    """Upload exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            code="CATALOG_FILE_TOO_LARGE",
            message="File exceeds the maximum upload size",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes}
        )


# ===================
# BROWSING ERRORS
# ===================

class SessionNotFoundError(NotFoundError):
    """Browsing session unknown or expired."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Session",
            identifier=session_id,
            code="SESSION_NOT_FOUND"
        )


class ProductNotFoundError(NotFoundError):
    """No product at the requested position in the current catalog."""

    def __init__(self, position: int):
        super().__init__(
            resource="Product",
            identifier=str(position),
            code="PRODUCT_NOT_FOUND"
        )
