"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console

from billomat_client.adapters.api_client import get_billomat_api_client
from billomat_client.cli.ui_components import build_checks_table, build_rate_limit_panel
from billomat_client.core.config import BillomatSettings, get_user_env_file
from billomat_client.core.domain.models import BillomatApiClientConfig, RateLimitStatistics
from billomat_client.core.domain.resources import ResourceName
from billomat_client.core.errors import BillomatError

app = typer.Typer(no_args_is_help=True, help="Configuration and connectivity checks.")

_console = Console()


async def _check_api(config: BillomatApiClientConfig) -> tuple[bool, str, RateLimitStatistics]:
    """List countries, a cheap endpoint every account can read."""

    api = get_billomat_api_client(config)
    try:
        async with api:
            countries = await api.resource(ResourceName.COUNTRIES).list({"per_page": "1"})
        return True, f"{len(countries)} country record(s)", api.rate_limit_statistics
    except (httpx.HTTPError, BillomatError) as exc:
        return False, str(exc), api.rate_limit_statistics


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = BillomatSettings()

    table = build_checks_table("Billomat Doctor")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    base_url = settings.effective_base_url
    table.add_row("Base URL", "OK" if base_url else "FAIL", base_url or "Set BILLOMAT_BILLOMAT_ID or BILLOMAT_BASE_URL")
    table.add_row("API key", "OK" if settings.api_key else "FAIL", "set" if settings.api_key else "Set BILLOMAT_API_KEY")
    if settings.app_id and settings.app_secret:
        table.add_row("App credentials", "OK", settings.app_id)
    else:
        table.add_row("App credentials", "OPTIONAL", "Not set -> default rate limit")

    try:
        config = settings.to_client_config()
    except ValueError as exc:
        _console.print(table)
        _console.print(f"\n[red]{exc}[/red] Run `billomat setup` to store credentials.")
        raise typer.Exit(code=1) from exc

    ok, detail, stats = asyncio.run(_check_api(config))
    table.add_row("API connectivity", "OK" if ok else "FAIL", detail)
    _console.print(table)

    if stats.is_known:
        _console.print(build_rate_limit_panel(stats))
    if not ok:
        raise typer.Exit(code=1)
