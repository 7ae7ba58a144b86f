from __future__ import annotations

from typing import Mapping

import typer

from models.records import ProcessingReport


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def render_averages(results: Mapping[str, float]) -> None:
    echo_heading("Average water temperature by location")
    if not results:
        typer.echo("No results.")
        return
    width = max(len("location"), *(len(location) for location in results))
    typer.echo(f"{'location'.ljust(width)}  average")
    for location_id in sorted(results):
        typer.echo(f"{location_id.ljust(width)}  {results[location_id]:g}")


def render_report(report: ProcessingReport, show_stats: bool = True) -> None:
    render_averages(report.results)
    if not show_stats:
        return
    typer.echo()
    echo_heading("Summary")
    typer.echo(f"rows: {report.row_count}")
    typer.echo(f"temperature rows: {report.temperature_row_count}")
    typer.echo(f"locations: {report.location_count}")
