"""
CLI Interface
=============
Command-line interface for the parse client.

Usage:
    python -m docparse_client parse <pdf_path> [options]
    python -m docparse_client upload <pdf_path>
    python -m docparse_client status <job_id>
    python -m docparse_client result <job_id> [options]

The API key is read from --api-key or LLAMA_CLOUD_API_KEY.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import SpinnerColumn, TextColumn, TimeElapsedColumn, Progress
from rich.table import Table

from . import __version__
from .client import ParseClient
from .config import API_KEY_ENV, BASE_URL_ENV, ClientConfig, PollingConfig
from .errors import ParseClientError
from .models import JobStatus, ParseResult
from .storage import result_name, save_result

console = Console()

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None):
    """Configure the package logger with console and optional file output."""
    level = getattr(logging, log_level.upper(), logging.WARNING)

    package_logger = logging.getLogger("docparse_client")
    package_logger.setLevel(level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(handler)

    for handler in package_logger.handlers:
        handler.setLevel(level)

    log_path = os.path.abspath(log_file) if log_file else None
    has_file_handler = any(
        isinstance(h, logging.FileHandler) and h.baseFilename == log_path
        for h in package_logger.handlers
    )
    if log_file and not has_file_handler:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        package_logger.addHandler(file_handler)


@click.group()
@click.version_option(version=__version__, prog_name="docparse")
@click.option(
    "--api-key",
    envvar=API_KEY_ENV,
    default=None,
    help=f"Service API key (default: ${API_KEY_ENV})",
)
@click.option(
    "--base-url",
    envvar=BASE_URL_ENV,
    default=None,
    help="Override the service base URL",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--log-file",
    default=None,
    help="Path to log file",
)
@click.pass_context
def cli(ctx, api_key, base_url, log_level, log_file):
    """DocParse: upload PDFs to the parsing service and fetch markdown."""
    setup_logging(log_level, log_file)
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key
    ctx.obj["base_url"] = base_url


def _make_client(ctx, polling: Optional[PollingConfig] = None) -> ParseClient:
    try:
        config = ClientConfig(
            api_key=ctx.obj.get("api_key") or "",
            base_url=ctx.obj.get("base_url") or "",
        )
        return ParseClient(config, polling=polling)
    except ParseClientError as e:
        _fail(e)


def _fail(error: Exception):
    console.print(f"[red]Error:[/] {escape(str(error))}")
    sys.exit(1)


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default="output",
    help="Output directory for markdown and metadata",
)
@click.option(
    "--poll-interval",
    default=1.0,
    type=float,
    help="Seconds between status checks",
)
@click.option(
    "--timeout",
    default=None,
    type=float,
    help="Give up after this many seconds (default: wait forever)",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Print the result as JSON to stdout instead of writing files",
)
@click.pass_context
def parse(
    ctx,
    pdf_path: str,
    output: str,
    poll_interval: float,
    timeout: Optional[float],
    json_output: bool,
):
    """Upload a PDF, wait for the job, and save the markdown result."""
    try:
        polling = PollingConfig(interval=poll_interval, timeout=timeout)
    except ParseClientError as e:
        _fail(e)

    client = _make_client(ctx, polling)

    if not json_output:
        console.print()
        console.print(
            Panel.fit(
                f"[bold cyan]DocParse v{__version__}[/]\n"
                f"[dim]Parsing: {os.path.basename(pdf_path)}[/]",
                border_style="cyan",
            )
        )
        console.print()

    try:
        with client:
            if json_output:
                result = client.parse_file(pdf_path)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    TimeElapsedColumn(),
                    console=console,
                ) as progress:
                    progress.add_task("Waiting for parse job...", total=None)
                    result = client.parse_file(pdf_path)
    except ParseClientError as e:
        _fail(e)

    if json_output:
        click.echo(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
        return

    markdown_file = save_result(result, output, result_name(pdf_path))
    _display_result(result)
    console.print(f"[green]✓[/] Markdown saved to: {markdown_file}")


@cli.command()
@click.argument("pdf_path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def upload(ctx, pdf_path: str):
    """Upload a PDF and print the job id."""
    client = _make_client(ctx)
    try:
        with client:
            job_id = client.upload(pdf_path)
    except ParseClientError as e:
        _fail(e)
    click.echo(job_id)


@cli.command()
@click.argument("job_id")
@click.pass_context
def status(ctx, job_id: str):
    """Show the status of a parse job."""
    client = _make_client(ctx)
    try:
        with client:
            job = client.check_status(job_id)
    except (ParseClientError, ValueError) as e:
        _fail(e)

    style = {
        JobStatus.PENDING: "yellow",
        JobStatus.SUCCESS: "green",
        JobStatus.FAILED: "red",
    }[job.status]
    console.print(f"Job {job_id}: [{style}]{job.status.value}[/]")
    if job.error:
        console.print(f"[dim]{escape(job.error)}[/]")


@cli.command()
@click.argument("job_id")
@click.option(
    "--output", "-o",
    default=None,
    help="Write markdown and metadata here instead of printing",
)
@click.pass_context
def result(ctx, job_id: str, output: Optional[str]):
    """Fetch the markdown result of a finished job."""
    client = _make_client(ctx)
    try:
        with client:
            parse_result = client.get_result(job_id)
    except (ParseClientError, ValueError) as e:
        _fail(e)

    if output is None:
        click.echo(parse_result.markdown)
        return

    markdown_file = save_result(parse_result, output, result_name(job_id))
    console.print(f"[green]✓[/] Markdown saved to: {markdown_file}")


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_result(result: ParseResult):
    """Display job metadata as a rich table."""
    meta = result.job_metadata

    table = Table(title="Job Metadata", border_style="cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Pages", str(meta.job_pages))
    table.add_row("Auto-mode Pages", str(meta.job_auto_mode_triggered_pages))
    table.add_row("Credits Used", f"{meta.credits_used:g}")
    table.add_row("Job Credits", f"{meta.job_credits_usage:g}")
    table.add_row("Credits Max", f"{meta.credits_max:g}")
    table.add_row(
        "Cache Hit",
        "[green]✓[/]" if meta.job_is_cache_hit else "[dim]no[/]",
    )
    table.add_row("Markdown Length", f"{len(result.markdown)} chars")

    console.print(table)
    console.print()


# ─── Entry point (for python -m docparse_client.cli) ──────────────────────────


if __name__ == "__main__":
    cli()
