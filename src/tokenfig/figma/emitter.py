"""
Variables document emitter.

Serializes collections to the JSON document Figma imports.
"""

from __future__ import annotations

import json
from pathlib import Path

from tokenfig.core.errors import EmitError, ErrorContext
from tokenfig.core.ir import Collection


def render_variables(collections: list[Collection]) -> str:
    """Render collections as 2-space indented JSON with a trailing newline."""
    payload = [c.model_dump(mode="json") for c in collections]
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def write_variables(collections: list[Collection], output_path: Path) -> Path:
    """
    Render collections and write them to a JSON file.

    Args:
        collections: Collections in output order
        output_path: Path to write variables.json

    Returns:
        Path to the written file

    Raises:
        EmitError: If the file cannot be written
    """
    content = render_variables(collections)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise EmitError(f"Cannot write variables: {e}", ErrorContext(file=output_path)) from e
    return output_path
