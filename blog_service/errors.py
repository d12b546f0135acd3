"""
Error types raised by the related posts service.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Error kinds surfaced to callers."""
    NOT_FOUND = "NOT_FOUND"                # Anchor or referenced article does not exist
    VALIDATION_ERROR = "VALIDATION_ERROR"  # Malformed request or incomplete article data
    FETCH_ERROR = "FETCH_ERROR"            # Unexpected failure while reading or scoring


class BlogServiceError(Exception):
    """Base error for the related posts service."""

    code: ErrorCode = ErrorCode.FETCH_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details: Dict[str, Any] = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.message,
            "code": self.code.value,
            "details": self.details,
        }


class NotFoundError(BlogServiceError):
    """Article id or slug does not exist in the corpus."""
    code = ErrorCode.NOT_FOUND


class ValidationError(BlogServiceError):
    """Request parameters or article data failed validation."""
    code = ErrorCode.VALIDATION_ERROR

    @property
    def errors(self) -> list:
        return list(self.details.get("errors") or [])


class FetchError(BlogServiceError):
    """Unexpected failure during corpus access or scoring."""
    code = ErrorCode.FETCH_ERROR

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message, details)
        self.cause = cause
