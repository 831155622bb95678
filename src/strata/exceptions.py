"""
Strata Exception Classes

Structured error classes with error codes, contextual messages, and suggestions.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import List, Optional


class StrataErrorCode(Enum):
    """Error codes for Strata exceptions."""

    # Tree and walk errors (STRATA-001 to STRATA-099)
    NOT_A_DIRECTORY = "STRATA-001"
    INVALID_IGNORE_FILE = "STRATA-002"
    DIRECTORY_READ_FAILED = "STRATA-003"
    GENERATOR_FAILED = "STRATA-004"

    # Generator errors (STRATA-100 to STRATA-199)
    INVALID_MANIFEST = "STRATA-100"
    GENERATOR_NOT_FOUND = "STRATA-101"

    # Configuration errors (STRATA-200 to STRATA-299)
    INVALID_CONFIG = "STRATA-200"


class StrataError(Exception):
    """
    Base exception for Strata errors.

    All Strata exceptions include:
    - Error code for searchability
    - Contextual error message
    - Suggested actions to resolve
    - The underlying cause, when wrapping another exception

    Example:
        raise StrataError(
            message="/srv/projects is not a directory",
            code=StrataErrorCode.NOT_A_DIRECTORY,
            suggestions=["Pass the directory that contains your service definitions"],
        )
    """

    def __init__(
        self,
        message: str,
        code: StrataErrorCode,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        """
        Initialize StrataError.

        Args:
            message: Clear description of what went wrong
            code: Error code from StrataErrorCode enum
            suggestions: List of suggested actions to resolve the error
            cause: Original exception that caused this error (if wrapping)
        """
        self.message = message
        self.code = code
        self.suggestions = suggestions or []
        self.cause = cause

        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with code, suggestions and cause."""

        lines = [
            f"{self.__class__.__name__} ({self.code.value}): {message}",
        ]

        if self.suggestions:
            lines.append("")
            lines.append("Suggested actions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"  {i}. {suggestion}")

        if self.cause:
            lines.append("")
            lines.append(f"Caused by: {type(self.cause).__name__}: {str(self.cause)}")

        return "\n".join(lines)


# Specific Error Classes


class RootPathError(StrataError):
    """Raised when the scan root is missing or is not a directory."""

    def __init__(self, path: Path | str, cause: Optional[BaseException] = None):
        self.path = Path(path)
        super().__init__(
            message=f"{path} is not a directory",
            code=StrataErrorCode.NOT_A_DIRECTORY,
            suggestions=["Check that the root path exists and points at a directory"],
            cause=cause,
        )


class IgnoreFileError(StrataError):
    """Raised when an ignore file cannot be read or compiled."""

    def __init__(self, path: Path | str, cause: Optional[BaseException] = None):
        self.path = Path(path)
        super().__init__(
            message=f"Invalid ignore file: {path}",
            code=StrataErrorCode.INVALID_IGNORE_FILE,
            suggestions=[
                "Ignore files use gitignore syntax and must be UTF-8 encoded",
                "Remove or fix the offending pattern",
            ],
            cause=cause,
        )


class DirectoryReadError(StrataError):
    """Raised when a directory cannot be listed while building the tree."""

    def __init__(self, path: Path | str, cause: Optional[BaseException] = None):
        self.path = Path(path)
        super().__init__(
            message=f"Could not list directory: {path}",
            code=StrataErrorCode.DIRECTORY_READ_FAILED,
            suggestions=[
                "Check directory permissions",
                "Add the directory to an ignore file to exclude it from the scan",
            ],
            cause=cause,
        )


class WalkError(StrataError):
    """Raised when a generator fails while visiting a directory."""

    def __init__(
        self,
        generator_name: str,
        path: Path | str,
        cause: Optional[BaseException] = None,
    ):
        self.generator_name = generator_name
        self.path = Path(path)
        super().__init__(
            message=f"Generator '{generator_name}' failed at {path}",
            code=StrataErrorCode.GENERATOR_FAILED,
            cause=cause,
        )


class ManifestError(StrataError):
    """Raised when a services manifest cannot be parsed."""

    def __init__(self, message: str, path: Path | str, cause: Optional[BaseException] = None):
        self.path = Path(path)
        super().__init__(
            message=f"{message} ({path})",
            code=StrataErrorCode.INVALID_MANIFEST,
            suggestions=[
                "Every service and group needs a 'name'",
                "'services', 'groups' and 'imports' must be lists",
            ],
            cause=cause,
        )


class GeneratorNotFoundError(StrataError):
    """Raised when a generator name is not registered."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        suggestions = ["Run 'strata generators' to list installed generators"]
        if available:
            suggestions.append(f"Available generators: {', '.join(available)}")
        super().__init__(
            message=f"Generator '{name}' is not registered",
            code=StrataErrorCode.GENERATOR_NOT_FOUND,
            suggestions=suggestions,
        )


class ConfigurationError(StrataError):
    """Raised when project configuration is invalid."""

    def __init__(
        self,
        message: str,
        suggestions: Optional[List[str]] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(
            message=message,
            code=StrataErrorCode.INVALID_CONFIG,
            suggestions=suggestions,
            cause=cause,
        )
