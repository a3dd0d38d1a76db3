"""
Design token IR types.

A Token is one leaf of a DTCG token tree: a node carrying ``$value``.
Its path is the sequence of group keys leading to it.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A value that is entirely one reference, e.g. "{color.brand.primary}"
REFERENCE_PATTERN = re.compile(r"^\{([^{}]+)\}$")

# Any reference embedded in a string, e.g. "{size.sm} solid {color.line}"
EMBEDDED_REFERENCE_PATTERN = re.compile(r"\{([^{}]+)\}")


def is_reference(value: Any) -> bool:
    """Check whether a raw value is a whole-string reference."""
    return isinstance(value, str) and REFERENCE_PATTERN.match(value.strip()) is not None


def reference_target(value: str) -> str:
    """Return the dotted path inside a ``{a.b.c}`` reference."""
    return value.strip()[1:-1].strip()


class Token(BaseModel):
    """A resolved design token."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(description="Group keys leading to the token")
    type: str | None = Field(default=None, description="$type, possibly inherited from a group")
    raw_value: Any = Field(default=None, description="$value as written in the source")
    resolved_value: Any = Field(default=None, description="Value after reference resolution")
    source_file: Path = Field(description="File the token was defined in")
    description: str | None = None

    @property
    def name(self) -> str:
        """Figma variable name (segments joined with '/')."""
        return "/".join(self.path)

    @property
    def dotted_path(self) -> str:
        """Reference key (segments joined with '.')."""
        return ".".join(self.path)

    @property
    def is_reference(self) -> bool:
        return is_reference(self.raw_value)
