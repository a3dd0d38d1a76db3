"""
tokenfig CLI Package.

- build.py: build, inspect and transforms commands
- utils.py: Shared utilities
"""

import sys

import typer

from tokenfig.cli.build import build_command, inspect_command, transforms_command
from tokenfig.cli.utils import get_version, version_callback

app = typer.Typer(
    help="tokenfig – build Figma variables from design tokens",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """tokenfig CLI main callback for global options."""
    pass


app.command(name="build")(build_command)
app.command(name="inspect")(inspect_command)
app.command(name="transforms")(transforms_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]


if __name__ == "__main__":
    main(sys.argv[1:])
