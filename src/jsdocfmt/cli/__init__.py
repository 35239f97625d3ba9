"""
CLI for jsdocfmt.

Provides command-line interface for formatting JSDoc comments in source files.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from jsdocfmt.core.config import FormatterConfig, LoggingConfig, load_config
from jsdocfmt.core.orchestrator import CommentOrchestrator
from jsdocfmt.services import FormatService

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="jsdocfmt",
    help="jsdocfmt - Normalize and re-render JSDoc comments",
    add_completion=False,
)


def _configure_logging(config: LoggingConfig, verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=config.format)


def _load(config_path: Optional[Path], print_width: Optional[int] = None) -> FormatterConfig:
    cfg = load_config(config_path)
    if print_width is not None:
        cfg.jsdoc.print_width = print_width
    return cfg


def create_format_service(cfg: FormatterConfig) -> FormatService:
    """Build the format service with the default collaborators."""
    return FormatService(CommentOrchestrator(cfg))


@app.command("format")
def format_command(
    paths: list[Path] = typer.Argument(..., help="Files or directories to format"),
    write: bool = typer.Option(False, "--write", "-w", help="Write changes back to the files"),
    check: bool = typer.Option(
        False, "--check", help="Exit with status 1 when a file would change"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
    print_width: Optional[int] = typer.Option(
        None, "--print-width", help="Maximum comment line width"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Format the JSDoc comments of JavaScript/TypeScript files."""
    try:
        cfg = _load(config_path, print_width)
        _configure_logging(cfg.logging, verbose)
        service = create_format_service(cfg)
        results = asyncio.run(service.format_paths(paths, write=write))
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    for result in results:
        for conflict in result.conflicts:
            console.print(f"[yellow]Warning:[/yellow] {result.path}: {conflict.message}")

    changed = [result for result in results if result.changed]

    if check:
        for result in changed:
            console.print(f"[yellow]Would reformat[/yellow] {result.path}")
        if changed:
            console.print(f"\n[bold red]{len(changed)} file(s) would be reformatted[/bold red]")
            raise typer.Exit(1)
        console.print(f"[bold green]{len(results)} file(s) already formatted[/bold green]")
        return

    if write:
        summary = Table.grid(padding=1)
        summary.add_column(style="bold")
        summary.add_column()
        summary.add_row("Files Checked:", str(len(results)))
        summary.add_row("Files Reformatted:", str(len(changed)))
        summary.add_row(
            "Duration:", f"{sum(result.duration_ms for result in results):.1f}ms"
        )
        console.print(
            Panel(
                summary,
                title="[bold green]Formatting Complete[/bold green]",
                border_style="green",
                expand=False,
            )
        )
        return

    # Plain output so the result can be piped; headers only for several files
    for index, result in enumerate(results):
        if len(results) > 1:
            if index:
                typer.echo()
            typer.echo(f"==> {result.path} <==")
        typer.echo(result.formatted, nl=False)


@app.command("show-config")
def show_config(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to a YAML or JSON config file"
    ),
):
    """Show the effective configuration."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(Syntax(cfg.to_yaml(), "yaml", theme="monokai"))


if __name__ == "__main__":
    app()
