"""CLI entry point for ngsreports."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ngsreports import __version__
from ngsreports.config import Settings, load_settings
from ngsreports.fastqc import (
    PartialCollection,
    ReportCollection,
    ReportError,
    find_reports,
    parse_collection_async,
)
from ngsreports.fastqc.accessors import read_totals, trim_names
from ngsreports.fastqc.models import REQUIRED_MODULES

console = Console()
app = typer.Typer(
    name="ngsreports",
    help="ngsreports - typed parsing of FastQC reports\n\nParse fastqc_data.txt files, zip archives and output folders.",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def expand_paths(paths: list[Path], depth: int) -> list[Path]:
    """Replace plain directories by the FastQC outputs found inside them."""
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir() and not (path / "fastqc_data.txt").is_file():
            expanded.extend(Path(p) for p in find_reports(path, max_depth=depth).paths())
        else:
            expanded.append(path)
    return expanded


def load_collection(
    paths: list[Path],
    settings: Settings,
    partial: bool = False,
    concurrency: int | None = None,
) -> ReportCollection | PartialCollection:
    sources = expand_paths(paths, settings.scan_depth)
    if not sources:
        console.print("[yellow]No FastQC reports found.[/yellow]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Parsing {len(sources)} report(s)...", total=None)
        try:
            return asyncio.run(
                parse_collection_async(
                    sources,
                    concurrency=concurrency or settings.concurrency,
                    partial=partial,
                )
            )
        except ReportError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)


def print_failures(result: PartialCollection) -> None:
    for failure in result.failures:
        console.print(
            f"[red]✗[/red] #{failure.index} {escape(failure.source)}: "
            f"[dim]{failure.error_type}[/dim] {escape(failure.message)}"
        )


@app.command()
def parse(
    paths: Annotated[list[Path], typer.Argument(help="FastQC zips, output folders, data files or directories to search")],
    partial: Annotated[bool, typer.Option("--partial", help="Keep going when a report fails to parse")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the parsed reports as JSON")] = False,
    concurrency: Annotated[Optional[int], typer.Option("--concurrency", "-j", help="Reports parsed in parallel")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """Parse FastQC reports and show their basic statistics."""
    settings = load_settings()
    configure_logging(settings, verbose)

    result = load_collection(paths, settings, partial=partial, concurrency=concurrency)
    reports = result.reports if isinstance(result, PartialCollection) else result

    if as_json:
        payload = result.model_dump(mode="json", by_alias=True)
        typer.echo(json.dumps(payload, indent=2))
    else:
        table = Table(title="FastQC reports")
        table.add_column("Filename")
        table.add_column("Version", style="dim")
        table.add_column("Total Sequences", justify="right")
        table.add_column("Length", justify="right")
        table.add_column("%GC", justify="right")
        table.add_column("Deduplicated %", justify="right")
        for report in reports:
            stats = report.basic_statistics.rows[0]
            dedup = report.deduplicated_percentage
            table.add_row(
                report.filename,
                report.version,
                f"{stats.total_sequences:,}",
                stats.sequence_length,
                str(stats.gc_percent),
                "-" if dedup is None else f"{dedup:.2f}",
            )
        console.print(table)

    if isinstance(result, PartialCollection) and result.failures:
        print_failures(result)
        raise typer.Exit(1)


@app.command()
def summary(
    paths: Annotated[list[Path], typer.Argument(help="FastQC outputs or directories to search")],
    partial: Annotated[bool, typer.Option("--partial", help="Keep going when a report fails to parse")] = False,
    trim: Annotated[bool, typer.Option("--trim-names/--no-trim-names", help="Shorten file names")] = True,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """Show the PASS/WARN/FAIL flags of every module as a grid."""
    settings = load_settings()
    configure_logging(settings, verbose)

    result = load_collection(paths, settings, partial=partial)
    reports = result.reports if isinstance(result, PartialCollection) else result
    names = reports.file_names()
    if trim:
        try:
            names = trim_names(names, settings.name_pattern)
        except ValueError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    table = Table(title="FastQC flags")
    table.add_column("Module")
    for name in names:
        table.add_column(name, justify="center")
    for module in REQUIRED_MODULES:
        cells = []
        for report in reports:
            status = report.summary_for(module)
            if status is None:
                cells.append("[dim]-[/dim]")
            else:
                colour = settings.colours.colour_for(status)
                cells.append(f"[{colour}]{status.value}[/{colour}]")
        table.add_row(module.replace("_", " "), *cells)
    console.print(table)

    if isinstance(result, PartialCollection) and result.failures:
        print_failures(result)
        raise typer.Exit(1)


@app.command()
def totals(
    paths: Annotated[list[Path], typer.Argument(help="FastQC outputs or directories to search")],
    trim: Annotated[bool, typer.Option("--trim-names/--no-trim-names", help="Shorten file names")] = True,
    millions: Annotated[bool, typer.Option("--millions", help="Always show totals in millions")] = False,
):
    """Show the total number of reads in each file."""
    settings = load_settings()
    configure_logging(settings, False)

    reports = load_collection(paths, settings)
    rows = read_totals(reports)
    names = [row["Filename"] for row in rows]
    if trim:
        try:
            names = trim_names(names, settings.name_pattern)
        except ValueError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if not millions:
        millions = max(row["Total_Sequences"] for row in rows) > 2e6

    table = Table(title="Read totals")
    table.add_column("Filename")
    table.add_column("Total Reads (millions)" if millions else "Total Reads", justify="right")
    for name, row in zip(names, rows):
        total = row["Total_Sequences"]
        table.add_row(name, f"{total / 1e6:.2f}" if millions else f"{total:,}")
    console.print(table)


@app.command()
def scan(
    path: Annotated[str, typer.Argument(help="Directory to scan")] = ".",
    depth: Annotated[Optional[int], typer.Option("--depth", "-d", help="Maximum directory depth")] = None,
):
    """Scan a directory for FastQC outputs.

    Lists zip archives and unzipped output folders without parsing them.
    """
    settings = load_settings()
    target = Path(path).resolve()

    if not target.exists():
        console.print(f"[red]Error: Path does not exist: {target}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Scanning:[/bold] {target}\n")
    try:
        result = find_reports(target, max_depth=settings.scan_depth if depth is None else depth)
    except NotADirectoryError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print("[bold]Results:[/bold]")
    console.print(f"  Archives: [green]{result.archive_count}[/green]")
    console.print(f"  Output folders: [blue]{result.directory_count}[/blue]")

    if result.reports:
        console.print("\n[bold]Reports:[/bold]")
        for r in result.reports[:20]:
            console.print(f"  • {r.name} ({r.kind.value}) - {r.size_human}")
        if len(result.reports) > 20:
            console.print(f"  [dim]... and {len(result.reports) - 20} more[/dim]")

    console.print()


@app.command()
def serve(
    port: Annotated[int, typer.Option("--port", "-p", help="Port to run the server on")] = 7878,
    host: Annotated[str, typer.Option("--host", help="Host to bind the server to")] = "127.0.0.1",
):
    """Start the HTTP API for parsing reports."""
    import uvicorn

    display_host = "localhost" if host in ("127.0.0.1", "0.0.0.0") else host
    console.print(f"[bold green]Serving ngsreports API[/bold green] at http://{display_host}:{port}")

    # Suppress verbose uvicorn logs
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    uvicorn.run(
        "ngsreports.api.main:app",
        host=host,
        port=port,
        log_level="warning",
    )


@app.command()
def version():
    """Show version information."""
    console.print(f"ngsreports v{__version__}")
    console.print("Typed parsing of FastQC reports")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
