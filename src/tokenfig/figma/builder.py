"""
Figma variable builder.

Walks a TokenDictionary in insertion order and sorts each token into the
light or dark collection as a typed Variable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from tokenfig.core.config import FigmaSection
from tokenfig.core.ir import Collection, Mode, Token, Variable, figma_type_for
from tokenfig.core.loader import TokenDictionary

from .transforms import TransformContext, TransformRegistry

logger = logging.getLogger(__name__)


@dataclass
class BuiltCollections:
    """Light and dark collections plus warnings raised while building them."""

    light: Collection
    dark: Collection
    warnings: list[str] = field(default_factory=list)

    def as_list(self) -> list[Collection]:
        """Collections in emission order: light first, dark second."""
        return [self.light, self.dark]


def build_variable(
    token: Token,
    registry: TransformRegistry,
    dictionary: TokenDictionary | None = None,
    *,
    dark: bool = False,
    warnings: list[str] | None = None,
) -> Variable:
    """Build a single Figma variable from a token."""
    context = TransformContext(
        token=token,
        dictionary=dictionary,
        dark=dark,
        warnings=warnings if warnings is not None else [],
    )
    return Variable(
        name=token.name,
        type=figma_type_for(token.type),
        value=registry.apply(context),
    )


def build_collections(
    dictionary: TokenDictionary,
    registry: TransformRegistry,
    names: FigmaSection | None = None,
) -> BuiltCollections:
    """
    Build the light and dark collections from every token in the dictionary.

    Args:
        dictionary: Resolved tokens, iterated in insertion order
        registry: Value transforms to apply to each token
        names: Collection and mode names (defaults to Light/Dark/Default)

    Returns:
        BuiltCollections with both collections and collected warnings
    """
    names = names or FigmaSection()
    result = BuiltCollections(
        light=Collection(name=names.light_collection, modes=[Mode(name=names.mode)]),
        dark=Collection(name=names.dark_collection, modes=[Mode(name=names.mode)]),
    )

    for token in dictionary:
        is_dark = dictionary.is_dark(token)
        variable = build_variable(
            token, registry, dictionary, dark=is_dark, warnings=result.warnings
        )
        (result.dark if is_dark else result.light).add(variable)

    logger.debug(
        "Built %d light and %d dark variable(s)",
        len(result.light.default_mode.variables),
        len(result.dark.default_mode.variables),
    )
    return result
