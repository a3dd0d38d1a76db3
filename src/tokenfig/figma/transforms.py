"""
Value transforms for Figma variables.

Each transform is a named pair of (matcher, transform). A TransformRegistry
holds transforms in application order and is built per run; the builder
receives it explicitly.

Built-in transforms:
- figma/reference: swap a whole-string reference for the target's raw value
- figma/color: CSS color string -> ColorRGBA with channels in [0, 1]
- figma/dimension: "16px" -> 16.0
- figma/fontWeight: "semibold" -> 600, "450" -> 450
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from PIL import ImageColor

from tokenfig.core.ir import BLACK, ColorRGBA, Token, is_reference, reference_target

if TYPE_CHECKING:
    from tokenfig.core.loader import TokenDictionary

logger = logging.getLogger(__name__)

FONT_WEIGHTS: dict[str, int] = {
    "normal": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
}

DEFAULT_DIMENSION = 0.0
DEFAULT_FONT_WEIGHT = 400

# Leading numeric prefix, as a lenient float/int parse would read it
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")

# rgba()/hsla() with a CSS fractional alpha, which ImageColor does not read
_CSS_ALPHA = re.compile(
    r"^\s*(rgb|hsl)a?\(\s*([^,()]+),\s*([^,()]+),\s*([^,()]+),\s*([0-9.]+)(%?)\s*\)\s*$",
    re.IGNORECASE,
)


@dataclass
class TransformContext:
    """Per-token state handed to every transform."""

    token: Token
    dictionary: TokenDictionary | None = None
    dark: bool = False
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)


Matcher = Callable[[Token], bool]
TransformFn = Callable[[Any, TransformContext], Any]


@dataclass(frozen=True)
class ValueTransform:
    """A named value transform and the tokens it applies to."""

    name: str
    matcher: Matcher
    transform: TransformFn
    description: str = ""
    resolves_references: bool = False

    def matches(self, token: Token) -> bool:
        return self.matcher(token)


class TransformRegistry:
    """Ordered set of value transforms applied to each token."""

    def __init__(self, transforms: Iterable[ValueTransform] = ()):
        self._transforms: list[ValueTransform] = []
        for transform in transforms:
            self.register(transform)

    def register(self, transform: ValueTransform) -> None:
        """Add a transform after those already registered."""
        if any(t.name == transform.name for t in self._transforms):
            raise ValueError(f"Transform already registered: {transform.name}")
        self._transforms.append(transform)

    def get(self, name: str) -> ValueTransform | None:
        for transform in self._transforms:
            if transform.name == name:
                return transform
        return None

    @property
    def names(self) -> list[str]:
        return [t.name for t in self._transforms]

    def __len__(self) -> int:
        return len(self._transforms)

    def apply(self, context: TransformContext) -> Any:
        """
        Run every matching transform over the token's value, in order.

        A whole-string reference starts from the raw value only when a
        reference transform is the first to match it. Every other token
        starts from its resolved value.
        """
        token = context.token
        matching = [t for t in self._transforms if t.matches(token)]
        if token.is_reference and matching and matching[0].resolves_references:
            value = token.raw_value
        else:
            value = token.resolved_value
        for transform in matching:
            value = transform.transform(value, context)
        return value


# =============================================================================
# Value helpers
# =============================================================================


def _split_css_alpha(value: str) -> tuple[str, float | None]:
    """Pull a fractional alpha out of rgba()/hsla() so ImageColor can read the rest."""
    match = _CSS_ALPHA.match(value)
    if not match:
        return value, None
    fn, c1, c2, c3, alpha, percent = match.groups()
    a = float(alpha) / 100 if percent else float(alpha)
    a = min(max(a, 0.0), 1.0)
    return f"{fn.lower()}({c1.strip()}, {c2.strip()}, {c3.strip()})", a


def parse_color(value: str) -> ColorRGBA:
    """
    Parse a CSS color string into float channels.

    Raises:
        ValueError: If the string is not a color ImageColor understands
    """
    base, alpha = _split_css_alpha(value.strip())
    channels = ImageColor.getrgb(base)
    r, g, b = (min(max(ch, 0), 255) for ch in channels[:3])
    if alpha is None:
        alpha = channels[3] / 255 if len(channels) == 4 else 1.0
    return ColorRGBA(r=r / 255, g=g / 255, b=b / 255, a=alpha)


def _is_rgba_object(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(value.get(ch), (int, float)) and not isinstance(value.get(ch), bool)
        for ch in ("r", "g", "b", "a")
    )


def _parse_float_prefix(value: str) -> float | None:
    match = _FLOAT_PREFIX.match(value)
    return float(match.group(1)) if match else None


def _finite(value: float | int | None) -> float | None:
    """Float value, or None when it is missing or not a finite number."""
    if value is None:
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def _parse_int_prefix(value: str) -> int | None:
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


# =============================================================================
# Transforms
# =============================================================================


def transform_reference(value: Any, context: TransformContext) -> Any:
    """Replace a ``{a.b}`` reference with the referenced token's raw value."""
    if not is_reference(value):
        return value
    if context.dictionary is None:
        return context.token.resolved_value

    target = context.dictionary.lookup(reference_target(value), dark=context.dark)
    if target is None:
        logger.debug("Unresolved reference %s on %s", value, context.token.name)
        return value
    if target.is_reference:
        # Chains deeper than one level use the loader's resolved value
        return context.token.resolved_value
    return target.raw_value


def transform_color(value: Any, context: TransformContext) -> ColorRGBA:
    if isinstance(value, ColorRGBA):
        return value
    if _is_rgba_object(value):
        return ColorRGBA(**{ch: min(max(value[ch], 0.0), 1.0) for ch in ("r", "g", "b", "a")})
    if value is None or value == "":
        context.warn(f"No color value found for token: {context.token.name}")
        return BLACK
    if isinstance(value, str):
        try:
            return parse_color(value)
        except ValueError:
            context.warn(f"Unparseable color {value!r} for token: {context.token.name}")
            return BLACK
    context.warn(f"Unsupported color value {value!r} for token: {context.token.name}")
    return BLACK


def transform_dimension(value: Any, context: TransformContext) -> float:
    if isinstance(value, bool):
        value = None
    if value is None or value == "":
        context.warn(f"No dimension value found for token: {context.token.name}")
        return DEFAULT_DIMENSION

    if isinstance(value, (int, float)):
        number = _finite(value)
    else:
        text = str(value).strip()
        if text.endswith("px"):
            text = text[:-2]
        number = _finite(_parse_float_prefix(text))
    if number is None:
        context.warn(f"Malformed dimension {value!r} for token: {context.token.name}")
        return DEFAULT_DIMENSION
    return number


def transform_font_weight(value: Any, context: TransformContext) -> int:
    if isinstance(value, bool):
        value = None
    if value is None or value == "":
        context.warn(f"No font weight value found for token: {context.token.name}")
        return DEFAULT_FONT_WEIGHT

    if isinstance(value, int):
        return value
    if isinstance(value, float):
        weight = int(value) if math.isfinite(value) else None
    else:
        text = str(value).strip()
        if text.lower() in FONT_WEIGHTS:
            return FONT_WEIGHTS[text.lower()]
        weight = _parse_int_prefix(text)
    if weight is None:
        context.warn(f"Malformed font weight {value!r} for token: {context.token.name}")
        return DEFAULT_FONT_WEIGHT
    return weight


def _type_is(token_type: str) -> Matcher:
    return lambda token: token.type == token_type


BUILTIN_TRANSFORMS: dict[str, ValueTransform] = {
    t.name: t
    for t in (
        ValueTransform(
            name="figma/reference",
            matcher=lambda token: token.is_reference,
            transform=transform_reference,
            description="Swap {a.b} references for the referenced raw value",
            resolves_references=True,
        ),
        ValueTransform(
            name="figma/color",
            matcher=_type_is("color"),
            transform=transform_color,
            description="CSS color -> {r, g, b, a} in [0, 1]",
        ),
        ValueTransform(
            name="figma/dimension",
            matcher=_type_is("dimension"),
            transform=transform_dimension,
            description="'16px' -> 16.0",
        ),
        ValueTransform(
            name="figma/fontWeight",
            matcher=_type_is("fontWeight"),
            transform=transform_font_weight,
            description="Keyword or numeric weight -> integer",
        ),
    )
}


def build_registry(names: Iterable[str]) -> TransformRegistry:
    """Build a registry from built-in transform names, keeping the given order."""
    registry = TransformRegistry()
    for name in names:
        if name not in BUILTIN_TRANSFORMS:
            raise KeyError(f"Unknown transform: {name}")
        registry.register(BUILTIN_TRANSFORMS[name])
    return registry


def default_registry() -> TransformRegistry:
    """Registry with every built-in transform, references first."""
    return TransformRegistry(BUILTIN_TRANSFORMS.values())
