"""
Application exceptions.
"""

from typing import Any, Optional


class APIError(Exception):
    """
    Error that maps directly to an HTTP response.

    Rendered by the exception handler in main.py as
    ``{"error": error, "details": details}`` (``details`` omitted when None).
    """

    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_content(self) -> dict:
        content = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content


class SpreadsheetParseError(Exception):
    """Raised when an uploaded spreadsheet cannot be opened or parsed."""
