"""
gen-mode CLI: generate mode constants from JSON or YAML descriptors.

Usage:
    gen-mode [OPTIONS] FILE...

Exit codes: 0 on success, 3 when no input file is given, 1 on any
generation error.
"""

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError as SettingsError
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import GeneratorSettings, get_settings
from ..errors import GenModeError
from ..logging import setup_logging
from ..pipeline import generate

USAGE_EXIT_CODE = 3

err_console = Console(stderr=True)
app = typer.Typer(
    name="gen-mode",
    help="Generate mode constants, a mode setter and predicates from descriptor files.",
    add_completion=False,
    rich_markup_mode=None,
)


@app.command()
def main(
    ctx: typer.Context,
    inputs: Optional[List[Path]] = typer.Argument(
        None, help="Descriptor files (JSON or YAML), merged in order", show_default=False
    ),
    pkg: Optional[str] = typer.Option(
        None, "--pkg", help="Package name to use in the generated code (default: main)"
    ),
    path: Optional[str] = typer.Option(
        None, "--path", help="Output directory (default: the generator's own directory)"
    ),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file; overrides --path and the default name"
    ),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target language: python or go (default: python)"
    ),
    env_var: Optional[str] = typer.Option(
        None, "--env-var", help="Environment variable read at start-up (default: MODE)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the generated source instead of writing it"
    ),
    show: bool = typer.Option(False, "--show", help="Print a table of the generated modes"),
):
    """Generate a mode module from one or more descriptor files."""
    if not inputs:
        err_console.print(ctx.get_help(), markup=False, highlight=False)
        raise typer.Exit(code=USAGE_EXIT_CODE)

    try:
        settings = _settings(pkg, target, env_var)
    except SettingsError as e:
        err_console.print(f"[red]Validation error:[/red] {escape(_settings_message(e))}")
        raise typer.Exit(code=1)

    setup_logging(settings)

    try:
        result = generate(
            inputs,
            package=settings.package,
            path=path,
            output=output,
            target=settings.target,
            env_var=settings.env_var,
            dry_run=dry_run,
        )
    except GenModeError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        err_console.print(f"[red]Validation error:[/red] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=1)

    if show:
        _print_modes(result.model)

    if dry_run:
        typer.echo(result.source, nl=False)
    else:
        err_console.print(f"[green]Wrote[/green] {escape(str(result.output))}", soft_wrap=True, highlight=False)


def _settings(pkg: Optional[str], target: Optional[str], env_var: Optional[str]) -> GeneratorSettings:
    """Apply CLI overrides on top of the environment settings."""
    overrides = {
        key: value
        for key, value in (("package", pkg), ("target", target), ("env_var", env_var))
        if value is not None
    }
    base = get_settings()
    if not overrides:
        return base
    return GeneratorSettings(**{**base.model_dump(), **overrides})


def _settings_message(error: SettingsError) -> str:
    return "; ".join(item["msg"] for item in error.errors())


def _print_modes(model):
    table = Table(title="Modes", box=box.ROUNDED)
    table.add_column("#", style="dim")
    table.add_column("Constant", style="bold")
    table.add_column("Literal")
    table.add_column("Meta")
    table.add_column("Default")

    for i, mode in enumerate(model.modes):
        table.add_row(
            str(i + 1),
            mode.constant_name,
            mode.literal,
            escape(mode.meta_statement),
            "[green]yes[/green]" if mode.constant_name == model.default_constant_name else "",
        )

    err_console.print(table)


if __name__ == "__main__":
    app()
