"""
Figma variables IR types.

Mirrors the shape Figma expects when importing variables:
collections contain modes, modes contain typed variables.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FigmaType(StrEnum):
    """Figma variable resolved types."""

    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"


# Token $type -> Figma variable type. Unlisted types map to STRING.
FIGMA_TYPE_MAP: dict[str, FigmaType] = {
    "color": FigmaType.COLOR,
    "dimension": FigmaType.FLOAT,
    "fontWeight": FigmaType.FLOAT,
    "fontSize": FigmaType.FLOAT,
    "lineHeight": FigmaType.FLOAT,
    "letterSpacing": FigmaType.FLOAT,
    "fontFamily": FigmaType.STRING,
}


def figma_type_for(token_type: str | None) -> FigmaType:
    """Map a token $type to its Figma variable type."""
    if token_type is None:
        return FigmaType.STRING
    return FIGMA_TYPE_MAP.get(token_type, FigmaType.STRING)


class ColorRGBA(BaseModel):
    """Color with floating-point channels in [0, 1]."""

    model_config = ConfigDict(frozen=True)

    r: float
    g: float
    b: float
    a: float = 1.0


BLACK = ColorRGBA(r=0.0, g=0.0, b=0.0, a=1.0)


class Variable(BaseModel):
    """A single Figma variable."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: FigmaType
    value: Any = None


class Mode(BaseModel):
    """A mode inside a collection, holding variables in build order."""

    name: str = "Default"
    variables: list[Variable] = Field(default_factory=list)


class Collection(BaseModel):
    """A named variable collection with its modes."""

    name: str
    modes: list[Mode] = Field(default_factory=lambda: [Mode()])

    @property
    def default_mode(self) -> Mode:
        return self.modes[0]

    def add(self, variable: Variable) -> None:
        """Append a variable to the collection's single mode."""
        self.default_mode.variables.append(variable)
