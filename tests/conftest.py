"""Shared pytest fixtures for tokenfig tests."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from tokenfig.core.ir import Token


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Return an empty token project directory."""
    (tmp_path / "tokens").mkdir()
    return tmp_path


@pytest.fixture
def write_tokens(project_dir: Path) -> Callable[[str, Any], Path]:
    """Return a helper that writes a JSON token file under tokens/."""

    def _write(relpath: str, data: Any) -> Path:
        path = project_dir / "tokens" / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_token() -> Callable[..., Token]:
    """Return a factory for resolved tokens."""

    def _make(
        dotted: str,
        type: str | None,
        raw_value: Any,
        resolved_value: Any = None,
        source_file: str = "tokens/base.json",
    ) -> Token:
        return Token(
            path=tuple(dotted.split(".")),
            type=type,
            raw_value=raw_value,
            resolved_value=raw_value if resolved_value is None else resolved_value,
            source_file=Path(source_file),
        )

    return _make
