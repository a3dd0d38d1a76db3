"""
Error types for tokenfig loading, configuration, and emission.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class TokenfigError(Exception):
    """Base exception for all tokenfig errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ConfigError(TokenfigError):
    """
    Raised when tokenfig.toml cannot be read or validated.

    Examples:
    - Invalid TOML syntax
    - Unknown transform names
    - Values of the wrong type
    """

    pass


class TokenLoadError(TokenfigError):
    """
    Raised when token source files cannot be loaded.

    Examples:
    - Unreadable file
    - Invalid JSON
    - Root value that is not an object
    """

    pass


class ReferenceCycleError(TokenLoadError):
    """Raised when token references form a cycle."""

    pass


class EmitError(TokenfigError):
    """
    Raised when the variables document cannot be written.

    Examples:
    - Build directory cannot be created
    - Output file cannot be written
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a token source.

    Attributes:
        file: Path to the token file
        pointer: Optional dotted token path inside the file
    """

    file: Path
    pointer: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "tokens/color.json (color.brand.primary)"
        """
        if self.pointer:
            return f"{self.file} ({self.pointer})"
        return str(self.file)


def make_load_error(
    message: str,
    file: Path,
    pointer: str | None = None,
) -> TokenLoadError:
    """
    Helper to create a TokenLoadError with context.

    Args:
        message: Error description
        file: Token file path
        pointer: Optional dotted token path

    Returns:
        TokenLoadError with context attached
    """
    return TokenLoadError(message, ErrorContext(file=file, pointer=pointer))
