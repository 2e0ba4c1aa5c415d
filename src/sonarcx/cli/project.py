from __future__ import annotations

from typing import cast, get_args

import typer
from rich import print

from ..models import (
    NewProject,
    NewProjectResponse,
    ProjectSearchResponse,
    Visibility,
    parse_response,
)
from .common import (
    console,
    ensure_success,
    get_client,
    handle_cli_errors,
    resolve_organization,
)

app = typer.Typer(help="Create, inspect, and delete SonarCloud projects.")

VISIBILITIES = get_args(Visibility)

ORG_OPTION = typer.Option(
    None, "--org", "-o", help="SonarCloud organization (defaults to SONARCLOUD_ORGANIZATION)"
)


@app.command("show")
@handle_cli_errors
def project_show(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Full project key, including any namespace prefix."),
    organization: str | None = ORG_OPTION,
) -> None:
    """Look up a project by key."""

    org = resolve_organization(ctx, organization)
    client = get_client(ctx)
    result = parse_response(ProjectSearchResponse, ensure_success(client.get_project(org, key)))
    if not result.components:
        print(f"[yellow]No project '{key}' in {org}.[/yellow]")
        return
    for component in result.components:
        analysed = component.last_analysis_date or "never analysed"
        print(f"[bold]{component.key}[/bold] name={component.name} last analysis={analysed}")


@app.command("create")
@handle_cli_errors
def project_create(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Project key; the configured prefix is prepended."),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    organization: str | None = ORG_OPTION,
    visibility: str = typer.Option(
        "public", "--visibility", help="Project visibility: public or private"
    ),
) -> None:
    """Create a project under an organization."""

    choice = visibility.strip().lower()
    if choice not in VISIBILITIES:
        raise typer.BadParameter(
            f"Visibility must be one of: {', '.join(VISIBILITIES)}", param_hint="--visibility"
        )
    org = resolve_organization(ctx, organization)
    client = get_client(ctx)
    payload = NewProject(
        organization=org,
        name=name,
        project=key,
        visibility=cast(Visibility, choice),
    )
    created = parse_response(NewProjectResponse, ensure_success(client.create_project(payload)))
    print(f"[green]Created[/green] {created.project.key} ({created.project.visibility})")


@app.command("delete")
@handle_cli_errors
def project_delete(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Project key as passed to 'project create'."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete a project created with 'project create'."""

    client = get_client(ctx)
    full_key = client.project_key(key)
    if not yes and not typer.confirm(f"Delete project {full_key}?"):
        console.print("Aborted.")
        raise typer.Exit(1)
    ensure_success(client.delete_project(key))
    print(f"[green]Deleted[/green] {full_key}")


__all__ = ["app", "project_create", "project_delete", "project_show"]
