"""
Build commands for tokenfig CLI.

Commands:
- build: Generate variables.json from token files
- inspect: Show the variables a build would produce
- transforms: List the built-in value transforms
"""

from __future__ import annotations

from pathlib import Path

import typer

from tokenfig.build import FigmaBuildRunner
from tokenfig.cli.utils import configure_logging
from tokenfig.cli_ui import (
    format_value,
    print_error,
    print_success,
    print_variables_table,
    print_warning,
)
from tokenfig.core.config import CONFIG_FILE, load_build_config
from tokenfig.core.errors import TokenfigError
from tokenfig.figma.transforms import BUILTIN_TRANSFORMS


def _make_runner(project_dir: Path, config_file: Path | None, output: Path | None = None):
    project_dir = project_dir.resolve()
    config_path = config_file.resolve() if config_file else project_dir / CONFIG_FILE
    config = load_build_config(config_path)
    build_path = output.resolve() if output else None
    return FigmaBuildRunner(project_dir, config, build_path=build_path)


def build_command(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Path to tokenfig.toml (default: <project>/tokenfig.toml)"
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Build directory (overrides [build].build_path)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """
    Build Figma variables from design tokens.

    The build directory is deleted and recreated on every run.
    """
    configure_logging(verbose)

    try:
        runner = _make_runner(project_dir, config_file, output)
        result = runner.run()
    except TokenfigError as e:
        print_error(f"Error building Figma variables: {e}")
        raise typer.Exit(code=1)

    for warning in result.warnings:
        print_warning(warning)

    print_success(
        f"Figma variables built! {result.output_path} "
        f"({result.light_count} light, {result.dark_count} dark)"
    )


def inspect_command(
    project_dir: Path = typer.Option(".", "--project", "-p", help="Project directory"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Path to tokenfig.toml"),
) -> None:
    """
    Show the variables a build would produce, without writing anything.
    """
    configure_logging()

    try:
        runner = _make_runner(project_dir, config_file)
        collections = runner.collect(runner.load())
    except TokenfigError as e:
        print_error(f"Error: {e}")
        raise typer.Exit(code=1)

    rows = []
    for collection in collections.as_list():
        for variable in collection.default_mode.variables:
            value = variable.model_dump(mode="json")["value"]
            rows.append((collection.name, variable.name, variable.type.value, format_value(value)))
    print_variables_table(rows, title=f"{len(rows)} variable(s)")

    for warning in collections.warnings:
        print_warning(warning)


def transforms_command() -> None:
    """List the built-in value transforms."""
    for name, transform in BUILTIN_TRANSFORMS.items():
        typer.echo(f"{name:<20} {transform.description}")
