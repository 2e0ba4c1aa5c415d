from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import replace
from functools import wraps
from typing import Any, ParamSpec, TypeVar, cast

import httpx
import typer
from rich.console import Console

from ..client import SonarCloudClient
from ..config import TOKEN_ENV, ClientSettings
from ..errors import (
    BadRequestError,
    ConfigurationError,
    HttpError,
    SonarCloudError,
    TokenRequiredError,
    TransportError,
)

console = Console()


def _render_http_error(exc: HttpError) -> None:
    console.print(f"[red]Error:[/red] HTTP {exc.status_code}: {exc.message}")
    details = exc.details
    if details:
        console.print(str(details))


CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except TokenRequiredError:
            console.print("[red]Error:[/red] A SonarCloud token is required.")
            console.print(f"Pass --token or export {TOKEN_ENV} before rerunning the command.")
            raise typer.Exit(1) from None
        except BadRequestError as exc:
            console.print(f"[red]Error:[/red] SonarCloud rejected the request: {exc.message}")
            raise typer.Exit(1) from None
        except HttpError as exc:
            _render_http_error(exc)
            raise typer.Exit(1) from None
        except TransportError as exc:
            console.print(f"[red]Error:[/red] Unable to reach SonarCloud: {exc.message}")
            raise typer.Exit(1) from None
        except ConfigurationError as exc:
            console.print(f"[red]Error:[/red] {exc.message}")
            raise typer.Exit(1) from None
        except SonarCloudError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise typer.Exit(1) from None
        except Exception as exc:
            if os.getenv("SONARCX_DEBUG"):
                raise
            console.print(f"[red]Error:[/red] Unexpected failure: {exc}")
            console.print("Set SONARCX_DEBUG=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


def get_settings(ctx: typer.Context) -> ClientSettings:
    ctx_obj = cast(dict[str, Any], ctx.ensure_object(dict))
    settings = ctx_obj.get("settings")
    if not isinstance(settings, ClientSettings):
        raise typer.BadParameter("CLI settings were not initialised.")
    return settings


def get_client(ctx: typer.Context) -> SonarCloudClient:
    """Return the client cached on ``ctx``, building it on first use."""

    ctx_obj = cast(dict[str, Any], ctx.ensure_object(dict))
    client = ctx_obj.get("client")
    if client is not None:
        return cast(SonarCloudClient, client)
    settings = get_settings(ctx)
    client = settings.create_client()
    ctx_obj["client"] = client
    ctx.call_on_close(client.close)
    return client


def resolve_organization(ctx: typer.Context, option_value: str | None) -> str:
    """Return the organization from the option or ``SONARCLOUD_ORGANIZATION``."""

    if option_value:
        return option_value
    organization = get_settings(ctx).organization
    if organization:
        return organization
    raise typer.BadParameter(
        "Organization is not configured. Pass --org or export SONARCLOUD_ORGANIZATION."
    )


def ensure_success(resp: httpx.Response) -> httpx.Response:
    """Raise :class:`HttpError` for any non-2xx response."""

    if resp.is_success:
        return resp
    raise HttpError(resp.status_code, resp.reason_phrase, response=resp, details=resp.text)


def override_settings(settings: ClientSettings, **overrides: Any) -> ClientSettings:
    values = {key: value for key, value in overrides.items() if value is not None}
    return replace(settings, **values) if values else settings


__all__ = [
    "console",
    "ensure_success",
    "get_client",
    "get_settings",
    "handle_cli_errors",
    "override_settings",
    "resolve_organization",
]
