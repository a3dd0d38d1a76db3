"""
Build runner - orchestrates the Figma variables build.

The FigmaBuildRunner cleans the build directory, loads and resolves token
files, builds the light and dark collections, and writes variables.json.
Any failure aborts the whole build.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from tokenfig.core.config import CONFIG_FILE, BuildConfig, load_build_config
from tokenfig.core.errors import ConfigError, EmitError, ErrorContext
from tokenfig.core.fileset import discover_token_files
from tokenfig.core.loader import TokenDictionary, load_token_dictionary
from tokenfig.figma import build_collections, build_registry, write_variables
from tokenfig.figma.builder import BuiltCollections

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """
    Result from a build run.

    Attributes:
        output_path: Path of the written variables document
        files_created: Files written by this run
        token_count: Number of tokens loaded
        light_count: Variables in the light collection
        dark_count: Variables in the dark collection
        warnings: Non-fatal value warnings
    """

    output_path: Path | None = None
    files_created: list[Path] = field(default_factory=list)
    token_count: int = 0
    light_count: int = 0
    dark_count: int = 0
    warnings: list[str] = field(default_factory=list)

    def add_file(self, path: Path) -> None:
        """Record a file that was created."""
        self.files_created.append(path)


class FigmaBuildRunner:
    """Runs one clean-room build for a token project."""

    def __init__(
        self,
        project_root: Path,
        config: BuildConfig | None = None,
        build_path: Path | None = None,
    ):
        """
        Initialize the build runner.

        Args:
            project_root: Directory token source patterns are relative to
            config: Optional build configuration (loaded from tokenfig.toml if not provided)
            build_path: Optional override of the configured build directory
        """
        self.project_root = project_root

        if config is None:
            config = load_build_config(project_root / CONFIG_FILE)

        self.config = config
        self.build_dir = build_path or config.get_build_path(project_root)
        self.output_path = self.build_dir / config.build.destination

    def _check_build_dir(self) -> None:
        """Refuse to delete a directory that holds the project or its token sources."""
        build_dir = self.build_dir.resolve()
        project_root = self.project_root.resolve()
        if project_root.is_relative_to(build_dir):
            raise ConfigError(
                f"Build directory {self.build_dir} contains the project root; "
                "refusing to delete it",
                ErrorContext(file=self.project_root / CONFIG_FILE),
            )
        light, dark = discover_token_files(self.project_root, self.config)
        for path in light + dark:
            if path.resolve().is_relative_to(build_dir):
                raise ConfigError(
                    f"Build directory {self.build_dir} contains token source {path}; "
                    "refusing to delete it",
                    ErrorContext(file=self.project_root / CONFIG_FILE),
                )

    def clean(self) -> None:
        """
        Delete and recreate the build directory.

        Raises:
            ConfigError: If the build directory contains the project or a token source
            EmitError: If the directory cannot be removed or created
        """
        if self.config.build.clean:
            self._check_build_dir()
        else:
            logger.warning("Clean disabled; stale files in %s may remain", self.build_dir)
        try:
            if self.config.build.clean and self.build_dir.exists():
                shutil.rmtree(self.build_dir)
                logger.info("Removed %s", self.build_dir)
            self.build_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise EmitError(
                f"Cannot prepare build directory: {e}", ErrorContext(file=self.build_dir)
            ) from e
        if self.config.build.clean:
            logger.info("Created fresh %s", self.build_dir)

    def load(self) -> TokenDictionary:
        """Discover and resolve token sources."""
        light, dark = discover_token_files(self.project_root, self.config)
        if not light and not dark:
            logger.warning("No token files matched %s", ", ".join(self.config.build.source))
        return load_token_dictionary(light, dark, dark_marker=self.config.build.dark_marker)

    def collect(self, dictionary: TokenDictionary) -> BuiltCollections:
        """Build collections with the configured transforms."""
        try:
            registry = build_registry(self.config.build.transforms)
        except (KeyError, ValueError) as e:
            raise ConfigError(str(e.args[0])) from e
        return build_collections(dictionary, registry, self.config.figma)

    def run(self) -> BuildResult:
        """
        Run the build: clean, load, build, write.

        Returns:
            BuildResult describing the written document

        Raises:
            TokenfigError: If loading, building, or writing fails
        """
        result = BuildResult()

        self.clean()
        dictionary = self.load()
        collections = self.collect(dictionary)

        result.output_path = write_variables(collections.as_list(), self.output_path)
        result.add_file(result.output_path)
        result.token_count = len(dictionary)
        result.light_count = len(collections.light.default_mode.variables)
        result.dark_count = len(collections.dark.default_mode.variables)
        result.warnings.extend(collections.warnings)

        logger.info("Wrote %s", result.output_path)
        return result


def build_figma_variables(project_root: Path, config: BuildConfig | None = None) -> BuildResult:
    """Run a build for ``project_root`` with its tokenfig.toml (or the given config)."""
    return FigmaBuildRunner(project_root, config).run()
