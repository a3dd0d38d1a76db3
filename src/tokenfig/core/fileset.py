from pathlib import Path

from .config import BuildConfig


def is_dark_source(path: Path | str, marker: str = "dark") -> bool:
    """Check whether a token file name carries the dark marker (``*.dark.json``)."""
    return f".{marker}." in Path(path).name


def discover_token_files(root: Path, config: BuildConfig) -> tuple[list[Path], list[Path]]:
    """Find token sources, split into (light, dark) lists in sorted path order."""
    files: set[Path] = set()
    for pattern in config.build.source:
        for p in root.glob(pattern):
            if p.is_file():
                files.add(p.resolve())

    marker = config.build.dark_marker
    light = sorted(p for p in files if not is_dark_source(p, marker))
    dark = sorted(p for p in files if is_dark_source(p, marker))
    return light, dark
