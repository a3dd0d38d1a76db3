"""
Figma variables generation: value transforms, builder, and emitter.
"""

from .builder import BuiltCollections, build_collections, build_variable
from .emitter import render_variables, write_variables
from .transforms import (
    BUILTIN_TRANSFORMS,
    TransformContext,
    TransformRegistry,
    ValueTransform,
    build_registry,
    default_registry,
    parse_color,
)

__all__ = [
    # Transforms
    "ValueTransform",
    "TransformRegistry",
    "TransformContext",
    "BUILTIN_TRANSFORMS",
    "build_registry",
    "default_registry",
    "parse_color",
    # Builder
    "BuiltCollections",
    "build_collections",
    "build_variable",
    # Emitter
    "render_variables",
    "write_variables",
]
