"""
Command-line interface for pdfextract.

Provides commands for:
- Listing the registered spatial types
- Showing the execution order of requested types
- Converting a PDF's spatial model to XML or text
- Listing the numbered references of a PDF

Usage:
    pdfextract types
    pdfextract order sections references
    pdfextract convert paper.pdf -t text_runs -t sections --to xml -o paper.xml
    pdfextract references paper.pdf
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from pdfextract import __version__
from pdfextract.config import APP_NAME, ExtractConfig
from pdfextract.errors import ConfigurationError
from pdfextract.ingest import PDFEventSource
from pdfextract.pipeline import SpatialPipeline
from pdfextract.render import FORMATS, render
from pdfextract.spatials import default_registry
from pdfextract.utils import parse_pages

app = typer.Typer(
    name=APP_NAME,
    help="pdfextract: layered spatial models of PDF pages",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"pdfextract v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log pipeline progress",
    ),
):
    """pdfextract: layered spatial models of PDF pages."""
    level = "DEBUG" if verbose else ExtractConfig.from_env().log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(message: str) -> None:
    console.print(f"[red]Error:[/] {message}", style="bold")
    raise typer.Exit(1)


@app.command()
def types():
    """List the registered spatial types."""
    registry = default_registry()
    table = Table(title=f"Spatial types ({len(registry)})")
    table.add_column("Type", style="cyan")
    table.add_column("Depends on", style="green")
    table.add_column("Description")
    for spatial_type in registry:
        table.add_row(
            spatial_type.name,
            ", ".join(spatial_type.depends_on) or "-",
            spatial_type.description,
        )
    console.print(table)


@app.command()
def order(
    names: List[str] = typer.Argument(..., help="Spatial types to resolve"),
):
    """Show the order in which spatial types would be built."""
    try:
        resolved = default_registry().resolve_order(names)
    except ConfigurationError as e:
        _fail(str(e))
    requested = set(names)
    for position, name in enumerate(resolved, 1):
        marker = "[bold]*[/]" if name in requested else " "
        console.print(f"{position:>2}. {marker} {name}")


@app.command()
def convert(
    input_file: Path = typer.Argument(..., help="Input PDF"),
    spatial_types: List[str] = typer.Option(
        ["text_runs"], "--type", "-t",
        help="Spatial type to extract (repeatable)",
    ),
    to: str = typer.Option(
        "xml", "--to",
        help=f"Output format ({', '.join(FORMATS)})",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Output file path (stdout if omitted)",
    ),
    pages: Optional[str] = typer.Option(
        None, "--pages", "-p",
        help="Pages to read, e.g. 1-3,5 (1-based)",
    ),
    render_all: bool = typer.Option(
        False, "--all",
        help="Also render types built only as dependencies",
    ),
):
    """Extract spatial types from a PDF and render them."""
    if to not in FORMATS:
        _fail(f"Unknown format {to!r}; expected one of {', '.join(FORMATS)}")
    if not input_file.exists():
        _fail(f"File not found: {input_file}")

    pipeline = SpatialPipeline(config=ExtractConfig.from_env())
    try:
        result = pipeline.run(spatial_types, PDFEventSource(input_file, pages=parse_pages(pages)))
    except ConfigurationError as e:
        _fail(str(e))

    output = render(result, to=to, explicit_only=not render_all)
    if output_file:
        output_file.write_text(output, encoding="utf-8")
        console.print(f"[green]Saved {to} to:[/] {output_file}")
        console.print(result.summary(), highlight=False)
    else:
        typer.echo(output)


@app.command()
def references(
    input_file: Path = typer.Argument(..., help="Input PDF"),
    keep_trailing: bool = typer.Option(
        True, "--keep-trailing/--drop-trailing",
        help="Close the text after the last number as a final reference",
    ),
    pages: Optional[str] = typer.Option(
        None, "--pages", "-p",
        help="Pages to read, e.g. 10-12 (1-based)",
    ),
):
    """List the numbered references found in a PDF."""
    if not input_file.exists():
        _fail(f"File not found: {input_file}")

    config = ExtractConfig.from_env()
    config.references.close_trailing = keep_trailing
    result = SpatialPipeline(config=config).run(
        ["references"], PDFEventSource(input_file, pages=parse_pages(pages)),
    )

    refs = result.objects("references")
    if not refs:
        console.print("[yellow]No numbered references found.[/]")
        return

    table = Table(title=f"References ({len(refs)})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Reference")
    for ref in refs:
        table.add_row(str(ref["order"]), ref["content"])
    console.print(table)


if __name__ == "__main__":
    app()
