from __future__ import annotations

import logging

import typer

from ..config import load_settings, validate_timeout
from . import badge, project, tokens
from .common import handle_cli_errors, override_settings

app = typer.Typer(help="SonarCloud projects, tokens, and badges")


def _register_sub_app(name: str, sub_app: typer.Typer) -> None:
    app.add_typer(sub_app, name=name)


_register_sub_app("project", project.app)
_register_sub_app("token", tokens.app)
_register_sub_app("badge", badge.app)


@app.callback()
@handle_cli_errors
def common(
    ctx: typer.Context,
    token: str | None = typer.Option(
        None, "--token", help="SonarCloud user token (defaults to SONARCLOUD_TOKEN)"
    ),
    host: str | None = typer.Option(
        None, "--host", help="SonarCloud host (defaults to SONARCLOUD_HOST or sonarcloud.io)"
    ),
    timeout: float | None = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests"),
) -> None:
    """Initialize shared Typer context state."""

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        )
    if timeout is not None:
        validate_timeout(timeout, "--timeout")
    ctx_obj = ctx.ensure_object(dict)
    settings = ctx_obj.get("settings") or load_settings()
    ctx_obj["settings"] = override_settings(settings, token=token, host=host, timeout=timeout)


def main() -> None:
    app()


__all__ = ["app", "badge", "main", "project", "tokens"]
