"""Main CLI interface."""

import asyncio
import logging
import sys
from datetime import date
from enum import Enum
from typing import List, Optional
import typer
import structlog
from rich.console import Console
from rich.table import Table

from ..models.config import ServiceConfig
from ..models.zman import DEFAULT_ZMANIM, ZMANIM_OPTIONS, get_zman_label
from ..service import ComparisonReport, ZmanimService
from ..data import NominatimGeocoder
from ..exceptions import GeocodingError
from ..core.comparator import time_difference
from ..export import build_rows, render_summary, to_tsv

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(help="Compare zmanim across locations and dates")


class OutputFormat(str, Enum):
    """Output formats for the compare command."""
    TABLE = "table"
    TSV = "tsv"
    SUMMARY = "summary"
    JSON = "json"


@app.command()
def compare(
    locations: List[str] = typer.Argument(..., help="Place names or 'lat, lng' pairs"),
    start: Optional[str] = typer.Option(None, "--start", "-s", help="Start date (YYYY-MM-DD), default today"),
    end: Optional[str] = typer.Option(None, "--end", "-e", help="End date (YYYY-MM-DD), default start date"),
    zmanim: Optional[List[str]] = typer.Option(
        None,
        "--zman",
        "-z",
        help="Zman to compare (can be repeated). Default: sunrise, sunset, chatzot"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Output format"),
    max_concurrent: Optional[int] = typer.Option(None, "--max-concurrent", help="Concurrent location fetches"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level")
):
    """Fetch zmanim for several locations and compare them."""
    try:
        start_date = date.fromisoformat(start) if start else date.today()
        end_date = date.fromisoformat(end) if end else start_date
    except ValueError as e:
        err_console.print(f"[red]Error parsing dates: {e}[/red]")
        raise typer.Exit(1)
    
    if end_date < start_date:
        err_console.print("[red]End date must not be before start date[/red]")
        raise typer.Exit(1)
    
    config = _load_config(log_level=log_level, max_concurrent=max_concurrent)
    _setup_logging(config.log_level, config.log_json)
    
    selected = list(zmanim) if zmanim else list(DEFAULT_ZMANIM)
    
    report = asyncio.run(_run_compare(
        config, locations, start_date.isoformat(), end_date.isoformat(), selected
    ))
    
    for failure in report.failures:
        err_console.print(f"[yellow]Could not load {failure.query}: {failure.error_message}[/yellow]")
    
    if not report.analysis.locations:
        err_console.print("[red]No location data could be loaded[/red]")
        raise typer.Exit(1)
    
    if output_format == OutputFormat.TSV:
        typer.echo(to_tsv(report.analysis, selected), nl=False)
    elif output_format == OutputFormat.SUMMARY:
        typer.echo(render_summary(report.analysis), nl=False)
    elif output_format == OutputFormat.JSON:
        typer.echo(report.analysis.model_dump_json(indent=2))
    else:
        _print_table(report, selected)


@app.command(name="zmanim")
def list_zmanim():
    """List the zmanim that can be compared."""
    table = Table(title="Zmanim")
    table.add_column("ID", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Category", style="yellow")
    
    for option in ZMANIM_OPTIONS:
        table.add_row(option.id, option.label, option.category.value)
    
    console.print(table)


@app.command()
def geocode(
    query: str = typer.Argument(..., help="Place name or 'lat, lng' pair"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level")
):
    """Resolve a place name to coordinates."""
    config = _load_config(log_level=log_level)
    _setup_logging(config.log_level, config.log_json)
    
    try:
        location = asyncio.run(_run_geocode(config, query))
    except GeocodingError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    
    console.print(f"[green]{location.display_name}[/green]")
    console.print(f"Latitude: {location.latitude}")
    console.print(f"Longitude: {location.longitude}")


@app.command()
def reverse(
    latitude: float = typer.Argument(..., help="Latitude"),
    longitude: float = typer.Argument(..., help="Longitude"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level")
):
    """Resolve coordinates to a place name."""
    config = _load_config(log_level=log_level)
    _setup_logging(config.log_level, config.log_json)
    
    try:
        name = asyncio.run(_run_reverse(config, latitude, longitude))
    except GeocodingError as e:
        err_console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    
    console.print(name)


async def _run_compare(
    config: ServiceConfig,
    queries: List[str],
    start_date: str,
    end_date: str,
    zmanim: List[str]
) -> ComparisonReport:
    """Run a comparison with a short-lived service."""
    async with ZmanimService(config) as service:
        return await service.compare(queries, start_date, end_date, zmanim)


async def _run_geocode(config: ServiceConfig, query: str):
    """Geocode a single query."""
    async with NominatimGeocoder(config.geocoding) as geocoder:
        return await geocoder.geocode(query)


async def _run_reverse(config: ServiceConfig, latitude: float, longitude: float) -> str:
    """Reverse geocode a single coordinate."""
    async with NominatimGeocoder(config.geocoding) as geocoder:
        return await geocoder.reverse(latitude, longitude)


def _print_table(report: ComparisonReport, zmanim: List[str]) -> None:
    """Print the date/location table, then the earliest-to-latest spread per date."""
    table = Table(title=f"Zmanim {report.start_date} to {report.end_date}")
    table.add_column("Date", style="cyan")
    table.add_column("Location", style="green")
    for zman_id in zmanim:
        table.add_column(get_zman_label(zman_id))
    
    for row in build_rows(report.analysis, zmanim):
        table.add_row(row.date, row.location, *[row.times.get(zman_id) or "-" for zman_id in zmanim])
    
    console.print(table)
    
    if len(report.analysis.locations) < 2:
        return
    
    dates = sorted({
        day
        for zman_id in zmanim
        if zman_id in report.analysis.zmanim
        for day in report.analysis[zman_id].date_groups
    })
    spread = Table(title="Spread between locations")
    spread.add_column("Date", style="cyan")
    for zman_id in zmanim:
        spread.add_column(get_zman_label(zman_id))
    
    for day in dates:
        cells = []
        for zman_id in zmanim:
            analysis = report.analysis.zmanim.get(zman_id)
            group = analysis.date_groups.get(day) if analysis else None
            cells.append((time_difference(group) if group is not None else None) or "-")
        spread.add_row(day, *cells)
    
    console.print(spread)


def _load_config(
    log_level: Optional[str] = None,
    max_concurrent: Optional[int] = None
) -> ServiceConfig:
    """Load service configuration."""
    # Start with environment-derived config
    config = ServiceConfig.from_env()
    
    # Override with CLI options
    if log_level:
        config.log_level = log_level
    if max_concurrent:
        config.max_concurrent = max_concurrent
    
    return config


def _setup_logging(log_level: str, json_logs: bool = False) -> None:
    """Setup logging configuration."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)
    
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def main() -> None:
    """Main entry point."""
    app()
