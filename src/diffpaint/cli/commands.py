"""CLI command implementations"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from diffpaint.config import PaintPolicy, Settings, build_policy, load_config
from diffpaint.core.highlight import list_themes
from diffpaint.core.pipeline import run_compare


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _policy(settings: Settings) -> PaintPolicy:
    try:
        return build_policy(settings)
    except ValueError as e:
        _fail("Invalid style configuration", e)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def compare_cmd(
    old: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Original file")],
    new: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Changed file")],
    number: Annotated[Optional[bool], typer.Option("--number/--no-number", "-n", help="Show line numbers")] = None,
    theme: Annotated[Optional[str], typer.Option("--theme", help="Syntax theme; 'none' disables highlighting")] = None,
    width: Annotated[Optional[str], typer.Option("--width", "-w", help="'variable' or a column count")] = None,
    markers: Annotated[Optional[bool], typer.Option("--keep-plus-minus-markers", help="Keep +/- markers")] = None,
    tabs: Annotated[Optional[int], typer.Option("--tabs", help="Spaces per tab")] = None,
    true_color: Annotated[Optional[str], typer.Option("--true-color", help="auto, always or never")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")] = False,
    ):
    """Paint the diff between two files."""
    _configure_logging(verbose)
    settings = _settings(overrides={
        "number": number, "theme": theme, "width": width,
        "keep_plus_minus_markers": markers, "tabs": tabs, "true_color": true_color,
    })
    policy = _policy(settings)
    try:
        hunks = run_compare(old, new, policy, sys.stdout)
    except (OSError, UnicodeDecodeError) as e:
        _fail("Could not read input", e)
    except ValueError as e:
        _fail(str(e))
    if hunks == 0:
        typer.echo("Files are identical.", err=True)


def themes_cmd():
    """List available syntax themes."""
    for name in list_themes():
        typer.echo(name)
