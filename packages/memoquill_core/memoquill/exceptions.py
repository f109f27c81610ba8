"""Custom exceptions for memoquill."""

from typing import Optional


class MemoQuillError(Exception):
    """Base exception for memoquill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ConfigurationError(MemoQuillError):
    """Exception raised for invalid layout configuration or memo input."""

    pass


class ParsingError(MemoQuillError):
    """Exception raised when markup cannot be turned into a node tree."""

    pass


class RenderingError(MemoQuillError):
    """Exception raised when the renderer rejects a document plan."""

    pass


class FontError(MemoQuillError):
    """Exception raised during font registration."""

    pass


class AssetError(MemoQuillError):
    """Exception raised when an image asset cannot be read."""

    pass
