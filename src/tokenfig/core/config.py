"""
Build configuration models.

Parses the [build] and [figma] sections from tokenfig.toml and provides
typed configuration for the Figma variables build.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError, ErrorContext

CONFIG_FILE = "tokenfig.toml"

DEFAULT_TRANSFORMS = [
    "figma/reference",
    "figma/color",
    "figma/dimension",
    "figma/fontWeight",
]


class BuildSection(BaseModel):
    """Source discovery and output configuration."""

    model_config = ConfigDict(frozen=True)

    source: list[str] = Field(default_factory=lambda: ["tokens/**/*.json"])
    build_path: str = "build/figma"
    destination: str = "variables.json"
    dark_marker: str = "dark"
    clean: bool = True
    transforms: list[str] = Field(default_factory=lambda: list(DEFAULT_TRANSFORMS))

    @field_validator("dark_marker")
    @classmethod
    def _marker_is_a_segment(cls, value: str) -> str:
        if not value or "." in value or "/" in value:
            raise ValueError("dark_marker must be a single filename segment, e.g. 'dark'")
        return value

    @field_validator("destination")
    @classmethod
    def _destination_is_a_filename(cls, value: str) -> str:
        if not value or Path(value).name != value:
            raise ValueError("destination must be a plain file name")
        return value


class FigmaSection(BaseModel):
    """Names used in the emitted variables document."""

    model_config = ConfigDict(frozen=True)

    light_collection: str = "Light"
    dark_collection: str = "Dark"
    mode: str = "Default"


class BuildConfig(BaseModel):
    """Complete build configuration."""

    model_config = ConfigDict(frozen=True)

    build: BuildSection = Field(default_factory=BuildSection)
    figma: FigmaSection = Field(default_factory=FigmaSection)

    def get_build_path(self, project_root: Path) -> Path:
        """Get absolute build directory path."""
        build_dir = Path(self.build.build_path)
        if build_dir.is_absolute():
            return build_dir
        return project_root / build_dir

    def get_output_file(self, project_root: Path) -> Path:
        """Get absolute path of the variables document."""
        return self.get_build_path(project_root) / self.build.destination


def load_build_config(toml_path: Path) -> BuildConfig:
    """
    Load build configuration from tokenfig.toml.

    Args:
        toml_path: Path to tokenfig.toml file

    Returns:
        BuildConfig with parsed values or defaults

    Raises:
        ConfigError: If the file is not valid TOML or fails validation
    """
    if not toml_path.exists():
        return BuildConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", ErrorContext(file=toml_path)) from e

    config_dict: dict[str, Any] = {}
    if "build" in data:
        config_dict["build"] = data["build"]
    if "figma" in data:
        config_dict["figma"] = data["figma"]

    try:
        config = BuildConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}", ErrorContext(file=toml_path)) from e

    _check_transform_names(config, toml_path)
    return config


def _check_transform_names(config: BuildConfig, toml_path: Path) -> None:
    from tokenfig.figma.transforms import BUILTIN_TRANSFORMS

    unknown = [name for name in config.build.transforms if name not in BUILTIN_TRANSFORMS]
    if unknown:
        known = ", ".join(sorted(BUILTIN_TRANSFORMS))
        raise ConfigError(
            f"Unknown transform(s): {', '.join(unknown)}. Available: {known}",
            ErrorContext(file=toml_path),
        )
