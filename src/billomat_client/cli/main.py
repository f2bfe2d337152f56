"""`billomat` command line interface."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, TypeVar

import httpx
import typer
from rich.console import Console

from billomat_client.adapters.api_client import BillomatApiClient, get_billomat_api_client
from billomat_client.cli import doctor
from billomat_client.cli.ui_components import build_rate_limit_panel, print_json
from billomat_client.core.config import BillomatSettings, write_user_env_vars
from billomat_client.core.domain.models import RawOptions
from billomat_client.core.errors import BillomatError

app = typer.Typer(no_args_is_help=True, help="Query the Billomat REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

R = TypeVar("R")


def _make_api() -> BillomatApiClient:
    settings = BillomatSettings()
    return get_billomat_api_client(settings.to_client_config())


def _parse_query(pairs: list[str] | None) -> dict[str, str]:
    query: dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise typer.BadParameter(f"expected key=value, got {pair!r}", param_hint="--query")
        key, value = pair.split("=", 1)
        query[key.strip()] = value.strip()
    return query


def _call(action: Callable[[BillomatApiClient], Awaitable[R]]) -> R:
    """Run `action` against a fresh client, then show the rate-limit counters."""

    try:
        api = _make_api()
    except ValueError as exc:
        _err_console.print(f"[red]{exc}[/red] Run `billomat setup` first.")
        raise typer.Exit(code=1) from exc

    async def _run() -> R:
        async with api:
            return await action(api)

    try:
        result = asyncio.run(_run())
    except (httpx.HTTPError, BillomatError) as exc:
        _err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    finally:
        if api.rate_limit_statistics.is_known:
            _err_console.print(build_rate_limit_panel(api.rate_limit_statistics))
    return result


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command(name="list")
def list_resources(
    resource: str = typer.Argument(..., help="Collection, e.g. invoices."),
    query: list[str] | None = typer.Option(None, "--query", "-q", help="Filter as key=value (repeatable)."),
) -> None:
    """List the first page of a collection."""

    params = _parse_query(query)
    items = _call(lambda api: api.resource(resource).list(params))
    print_json(_console, items)


@app.command()
def get(
    resource: str = typer.Argument(..., help="Collection, e.g. invoices."),
    id: int = typer.Argument(..., help="Numeric entity id."),
) -> None:
    """Fetch one entity by id."""

    item = _call(lambda api: api.resource(resource).get(id))
    print_json(_console, item)


@app.command()
def raw(
    resource: str = typer.Argument(..., help="Collection, e.g. invoices."),
    method: str = typer.Argument(..., help="HTTP method."),
    sub_uri: str | None = typer.Argument(None, help="Path below the collection, e.g. 42/complete."),
    query: list[str] | None = typer.Option(None, "--query", "-q", help="Query as key=value (repeatable)."),
    payload: str | None = typer.Option(None, "--payload", "-p", help="JSON request body."),
) -> None:
    """Call an endpoint outside the usual envelope convention."""

    body: Any = None
    if payload:
        try:
            body = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--payload") from exc

    options = RawOptions(query=_parse_query(query), payload=body)
    result = _call(lambda api: api.resource(resource).raw(method, sub_uri, options))
    print_json(_console, result)


@app.command()
def setup() -> None:
    """Interactive setup (stores credentials in the user config .env)."""

    billomat_id = typer.prompt("Billomat ID (https://<id>.billomat.net)").strip()
    api_key = typer.prompt("API key", hide_input=True).strip()
    app_id = typer.prompt("App id (optional)", default="", show_default=False).strip()
    app_secret = typer.prompt("App secret (optional)", default="", show_default=False, hide_input=True).strip()

    if not billomat_id or not api_key:
        raise typer.BadParameter("Billomat ID and API key are required")

    env_path = write_user_env_vars(
        {
            "BILLOMAT_BILLOMAT_ID": billomat_id,
            "BILLOMAT_API_KEY": api_key,
            "BILLOMAT_APP_ID": app_id or None,
            "BILLOMAT_APP_SECRET": app_secret or None,
        }
    )
    _console.print(f"[green]Saved Billomat config to:[/green] {env_path}")


def run() -> None:
    app()
