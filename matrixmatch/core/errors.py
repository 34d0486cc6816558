"""Exceptions raised at the load and export boundaries of a matching run.

The matcher itself never raises for well-formed inputs; failures are detected
when reading transform files or writing the offsets file.
"""

from __future__ import annotations

from pathlib import Path


class MatrixMatchError(Exception):
    """Base exception for all matrixmatch errors."""

    pass


class LoadError(MatrixMatchError):
    """Raised when a transform set cannot be obtained."""

    def __init__(self, message: str, path: str | Path | None = None):
        """Initialize LoadError.

        Args:
            message: Error message
            path: Source file that failed to load
        """
        self.path = str(path) if path is not None else None

        full_message = message
        if self.path:
            full_message = f"{full_message} (path: {self.path})"

        super().__init__(full_message)


class ParseError(LoadError):
    """Raised when a transform payload is empty or malformed."""

    pass


class ExportError(MatrixMatchError):
    """Raised when the offsets file cannot be written."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = str(path) if path is not None else None

        full_message = message
        if self.path:
            full_message = f"{full_message} (path: {self.path})"

        super().__init__(full_message)
