"""
Errors raised by the document loaders.

Loaders fetch source documents and talk to the layout parser. Their
failures are kept apart from tree building errors so callers can tell a
bad network or service from a bad block list.
"""

from __future__ import annotations

from typing import Any


class LayoutReaderError(Exception):
    """Base exception for loader errors."""

    def __init__(self, message: str, source: str | None = None, details: str | None = None):
        self.source = source
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "source": self.source,
            "details": self.details,
        }


class FetchError(LayoutReaderError):
    """Raised when a source document cannot be read or downloaded."""


class ParserServiceError(LayoutReaderError):
    """Raised when the layout parser cannot be reached or answers badly."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        details: str | None = None,
        status_code: int | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, source=source, details=details)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result
