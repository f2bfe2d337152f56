"""Rich components for the CLI.

Why separate components:
- Commands stay free of layout details.
- `doctor` and the data commands share the same rate-limit panel.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from billomat_client.core.domain.models import RateLimitStatistics


def build_rate_limit_panel(stats: RateLimitStatistics) -> Panel:
    """Panel summarising the latest rate-limit headers."""

    body = Text()
    body.append("Remaining: ", style="bold")
    body.append(f"{stats.limit_remaining}\n")
    if stats.limit_reset_at is not None:
        body.append("Resets at: ", style="bold")
        body.append(f"{stats.limit_reset_at.isoformat()}\n")
    if stats.last_response_at is not None:
        body.append("Last response: ", style="dim")
        body.append(stats.last_response_at.isoformat(), style="dim")

    return Panel(body, title=Text("Rate limit", style="bold yellow"), border_style="yellow")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def print_json(console: Console, data: Any) -> None:
    console.print_json(data=data, default=str)
