"""Commands for issuing and revoking SonarCloud user tokens."""

from __future__ import annotations

import typer
from rich import print

from ..models import NewTokenResponse, TokenSearchResponse, parse_response
from .common import ensure_success, get_client, handle_cli_errors

app = typer.Typer(help="Manage SonarCloud user tokens.")


@app.command("list")
@handle_cli_errors
def token_list(
    ctx: typer.Context,
    login: str = typer.Option("", "--login", help="User login (defaults to the caller)"),
) -> None:
    """List token names with creation and last-use timestamps."""

    client = get_client(ctx)
    result = parse_response(TokenSearchResponse, ensure_success(client.get_tokens(login)))
    if not result.user_tokens:
        print("[yellow]No tokens found.[/yellow]")
        return
    for item in result.user_tokens:
        last_used = item.last_connection_date or "never"
        print(f"[bold]{item.name}[/bold] created={item.created_at} last used={last_used}")


@app.command("create")
@handle_cli_errors
def token_create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Token name, unique per user"),
) -> None:
    """Generate a token and print its secret once."""

    client = get_client(ctx)
    created = parse_response(NewTokenResponse, ensure_success(client.create_token(name)))
    print(f"[green]Created token[/green] {created.name}")
    print("Store this value now; SonarCloud will not show it again:")
    typer.echo(created.token)


@app.command("revoke")
@handle_cli_errors
def token_revoke(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Token name"),
) -> None:
    """Revoke a token by name."""

    client = get_client(ctx)
    ensure_success(client.revoke_token(name))
    print(f"[green]Revoked token[/green] {name}")


__all__ = ["app", "token_create", "token_list", "token_revoke"]
