"""CLI entrypoint: Typer app definition and command registration"""

import typer

from diffpaint.cli.commands import compare_cmd, themes_cmd


app = typer.Typer(name="diffpaint", no_args_is_help=True, help="Syntax-highlighted, width-aware terminal diffs")

app.command(name="compare")(compare_cmd)
app.command(name="themes")(themes_cmd)
