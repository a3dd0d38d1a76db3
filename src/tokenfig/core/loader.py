"""
Token source loading and reference resolution.

Reads DTCG-style JSON token files into an ordered TokenDictionary:

- Nodes carrying ``$value`` are tokens; every other object is a group.
- A group's ``$type`` is inherited by tokens that do not declare one.
- Tokens keep document order; files are read in the order given.
- References (``{a.b.c}``) are resolved through the whole chain.
  Dark tokens see dark definitions first, then light ones.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .errors import ErrorContext, ReferenceCycleError, make_load_error
from .fileset import is_dark_source
from .ir import EMBEDDED_REFERENCE_PATTERN, REFERENCE_PATTERN, Token

logger = logging.getLogger(__name__)


class TokenDictionary:
    """
    Ordered, resolved token set.

    Iteration yields tokens in insertion order: every light file's tokens
    first, then every dark file's tokens. Lookups by dotted path are
    theme-aware so a dark override shadows its light counterpart.
    """

    def __init__(self, tokens: list[Token], dark_marker: str = "dark"):
        self.dark_marker = dark_marker
        self._tokens = list(tokens)
        self._light: dict[str, Token] = {}
        self._dark: dict[str, Token] = {}
        for token in self._tokens:
            index = self._dark if self.is_dark(token) else self._light
            index[token.dotted_path] = token

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def all_tokens(self) -> list[Token]:
        return list(self._tokens)

    def is_dark(self, token: Token) -> bool:
        return is_dark_source(token.source_file, self.dark_marker)

    def lookup(self, dotted_path: str, *, dark: bool = False) -> Token | None:
        """Find a token by dotted path, preferring dark definitions when asked."""
        if dark and dotted_path in self._dark:
            return self._dark[dotted_path]
        return self._light.get(dotted_path)


# =============================================================================
# Reading
# =============================================================================


def read_token_file(path: Path) -> dict[str, Any]:
    """Read one token file, returning its root object."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_load_error(f"Cannot read token file: {e}", path) from e
    except json.JSONDecodeError as e:
        raise make_load_error(f"Invalid JSON at line {e.lineno}: {e.msg}", path) from e

    if not isinstance(data, dict):
        raise make_load_error("Token file root must be a JSON object", path)
    return data


def flatten_tokens(
    data: dict[str, Any],
    source_file: Path,
    parent_path: tuple[str, ...] = (),
    inherited_type: str | None = None,
) -> list[dict[str, Any]]:
    """
    Flatten a token tree into unresolved token records, in document order.

    Keys starting with ``$`` on groups are metadata and are skipped.
    """
    records: list[dict[str, Any]] = []
    group_type = data.get("$type", inherited_type)

    for key, node in data.items():
        if key.startswith("$"):
            continue
        path = (*parent_path, key)
        if not isinstance(node, dict):
            raise make_load_error(
                f"Expected a token or group object, got {type(node).__name__}",
                source_file,
                ".".join(path),
            )
        if "$value" in node:
            records.append(
                {
                    "path": path,
                    "type": node.get("$type", group_type),
                    "raw_value": node["$value"],
                    "source_file": source_file,
                    "description": node.get("$description"),
                }
            )
        else:
            records.extend(flatten_tokens(node, source_file, path, group_type))

    return records


# =============================================================================
# Resolution
# =============================================================================


class _Resolver:
    """Resolves references across light and dark record indexes."""

    def __init__(self, light: dict[str, dict[str, Any]], dark: dict[str, dict[str, Any]]):
        self.light = light
        self.dark = dark
        self._cache: dict[tuple[str, bool], Any] = {}

    def _find(self, dotted: str, dark: bool) -> dict[str, Any] | None:
        if dark and dotted in self.dark:
            return self.dark[dotted]
        return self.light.get(dotted)

    def resolve(self, record: dict[str, Any], dark: bool) -> Any:
        return self._resolve_value(record["raw_value"], record, dark, ())

    def _resolve_value(
        self,
        value: Any,
        record: dict[str, Any],
        dark: bool,
        stack: tuple[str, ...],
    ) -> Any:
        if isinstance(value, dict):
            return {k: self._resolve_value(v, record, dark, stack) for k, v in value.items()}
        if isinstance(value, list):
            return [self._resolve_value(v, record, dark, stack) for v in value]
        if not isinstance(value, str) or "{" not in value:
            return value

        whole = REFERENCE_PATTERN.match(value.strip())
        if whole:
            return self._resolve_reference(whole.group(1).strip(), value, record, dark, stack)

        def _interpolate(match: Any) -> str:
            resolved = self._resolve_reference(
                match.group(1).strip(), match.group(0), record, dark, stack
            )
            return str(resolved)

        return EMBEDDED_REFERENCE_PATTERN.sub(_interpolate, value)

    def _resolve_reference(
        self,
        dotted: str,
        original: str,
        record: dict[str, Any],
        dark: bool,
        stack: tuple[str, ...],
    ) -> Any:
        if dotted in stack:
            chain = " -> ".join((*stack, dotted))
            raise ReferenceCycleError(
                f"Circular reference: {chain}",
                ErrorContext(file=record["source_file"], pointer=".".join(record["path"])),
            )

        key = (dotted, dark)
        if key in self._cache:
            return self._cache[key]

        target = self._find(dotted, dark)
        if target is None:
            logger.debug("Unresolved reference %s in %s", original, ".".join(record["path"]))
            return original

        resolved = self._resolve_value(target["raw_value"], target, dark, (*stack, dotted))
        self._cache[key] = resolved
        return resolved


def resolve_records(
    records: list[dict[str, Any]], dark_marker: str = "dark"
) -> TokenDictionary:
    """Resolve references in flattened records and build a TokenDictionary."""
    light: dict[str, dict[str, Any]] = {}
    dark: dict[str, dict[str, Any]] = {}
    for record in records:
        dotted = ".".join(record["path"])
        index = dark if is_dark_source(record["source_file"], dark_marker) else light
        if dotted in index:
            logger.debug("Token %s redefined in %s", dotted, record["source_file"])
        index[dotted] = record

    resolver = _Resolver(light, dark)
    tokens = []
    for record in records:
        is_dark = is_dark_source(record["source_file"], dark_marker)
        tokens.append(Token(**record, resolved_value=resolver.resolve(record, is_dark)))

    return TokenDictionary(tokens, dark_marker=dark_marker)


def load_token_dictionary(
    light_files: list[Path],
    dark_files: list[Path],
    dark_marker: str = "dark",
) -> TokenDictionary:
    """
    Load light and dark token files into a resolved TokenDictionary.

    Args:
        light_files: Token files for the default (light) pass
        dark_files: Token files carrying the dark marker
        dark_marker: Filename marker identifying dark files

    Returns:
        TokenDictionary with light tokens first, then dark tokens

    Raises:
        TokenLoadError: If a file cannot be read or parsed
        ReferenceCycleError: If references form a cycle
    """
    records: list[dict[str, Any]] = []
    for path in [*light_files, *dark_files]:
        file_records = flatten_tokens(read_token_file(path), path)
        logger.debug("Loaded %d token(s) from %s", len(file_records), path)
        records.extend(file_records)

    return resolve_records(records, dark_marker=dark_marker)
