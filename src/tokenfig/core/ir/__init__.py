"""
tokenfig Intermediate Representation (IR) types.

Token-side types live in ``tokens``; Figma-side types in ``figma``.
All types are re-exported from this package.
"""

from .figma import (
    BLACK,
    FIGMA_TYPE_MAP,
    Collection,
    ColorRGBA,
    FigmaType,
    Mode,
    Variable,
    figma_type_for,
)
from .tokens import (
    EMBEDDED_REFERENCE_PATTERN,
    REFERENCE_PATTERN,
    Token,
    is_reference,
    reference_target,
)

__all__ = [
    # Tokens
    "Token",
    "REFERENCE_PATTERN",
    "EMBEDDED_REFERENCE_PATTERN",
    "is_reference",
    "reference_target",
    # Figma
    "FigmaType",
    "FIGMA_TYPE_MAP",
    "figma_type_for",
    "ColorRGBA",
    "BLACK",
    "Variable",
    "Mode",
    "Collection",
]
