from __future__ import annotations

from pathlib import Path

import httpx
import typer
from rich import print

from ..models import Metric
from .common import ensure_success, get_client, handle_cli_errors

app = typer.Typer(help="Download SVG badges for a project.")

OUTPUT_OPTION = typer.Option(
    None, "--output", "-o", help="Write the SVG to this file instead of stdout"
)
BRANCH_OPTION = typer.Option("", "--branch", "-b", help="Branch (defaults to the main branch)")


def _emit_svg(resp: httpx.Response, output: Path | None) -> None:
    svg = ensure_success(resp).text
    if output is None:
        typer.echo(svg)
        return
    output.write_text(svg, encoding="utf-8")
    print(f"[green]Badge written[/green] to {output}")


def _parse_metric(value: str) -> Metric:
    try:
        return Metric.from_name(value)
    except ValueError as exc:
        choices = ", ".join(m.metric_name for m in Metric)
        raise typer.BadParameter(f"{exc}; choose one of: {choices}") from None


@app.command("metric")
@handle_cli_errors
def badge_metric(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Full project key"),
    metric: str = typer.Argument(..., help="Metric name, e.g. coverage or code_smells"),
    branch: str = BRANCH_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Fetch the badge for a single metric."""

    selected = _parse_metric(metric)
    client = get_client(ctx)
    _emit_svg(client.get_metric(selected, project, branch), output)


@app.command("quality-gate")
@handle_cli_errors
def badge_quality_gate(
    ctx: typer.Context,
    project: str = typer.Argument(..., help="Full project key"),
    branch: str = BRANCH_OPTION,
    output: Path | None = OUTPUT_OPTION,
) -> None:
    """Fetch the quality gate status badge."""

    client = get_client(ctx)
    _emit_svg(client.get_quality_gate(project, branch), output)


__all__ = ["app", "badge_metric", "badge_quality_gate"]
