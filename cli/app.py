from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_averages, render_report
from logging_config import configure_logging
from models.errors import PipelineError
from services.processor import build_default_processor


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Average water temperature per monitoring location from water-quality CSV files.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Aggregator API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="HTTP timeout in seconds for API requests.",
    ),
    retries: Optional[int] = typer.Option(
        None,
        "--retries",
        min=0,
        help="Retries after connection failures or server errors (defaults to 3).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Entry point for the CLI."""
    configure_logging("DEBUG" if verbose else "WARNING", force=True)
    config = load_config(base_url=base_url, timeout=timeout, max_retries=retries)
    ctx.obj = CLIState(config=config)


@app.command("process")
def process_command(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
    stats: bool = typer.Option(True, "--stats/--no-stats", help="Print row and location counts."),
) -> None:
    """Compute averages locally without contacting the API."""
    processor = build_default_processor()
    try:
        report = processor.process_path(file)
    except PipelineError as exc:
        typer.secho(f"Error ({exc.kind.value}): {exc.message}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    render_report(report, show_stats=stats)


@app.command("upload")
def upload_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Path to CSV file."),
) -> None:
    """Upload a CSV file to the API and print the averages it returns."""
    state = _get_state(ctx)
    client = ApiClient(state.config)
    ctx.call_on_close(client.close)
    typer.echo(f"Uploading {file} to {state.config.base_url} ...")
    results = client.upload_csv(file)
    typer.echo()
    render_averages(results)
