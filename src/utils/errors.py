"""
Exceptions raised while scanning uploaded documents for PII.

They never reach the user as-is: ScanService turns them into display
messages at its boundary.
"""

from typing import Any, Optional


class PIIScanError(Exception):
    """Base exception for PII scan failures."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class UnsupportedTypeError(PIIScanError):
    """Declared MIME type cannot be turned into text."""

    def __init__(self, file_type: str) -> None:
        super().__init__(
            f"Unsupported file type: {file_type}. Please upload a PDF document.",
            {"file_type": file_type},
        )
        self.file_type = file_type


class ExtractionError(PIIScanError):
    """Payload could not be decoded or the extractor failed."""

    pass


class InternalError(PIIScanError):
    """Unexpected failure while detecting PII or formatting the report."""

    pass
