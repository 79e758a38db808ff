"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.sources_api import SOURCES_PATH
from core.config import ProbeSettings, get_user_env_file
from core.domain.models import RequestDescriptor
from core.services.probe_runner import run_descriptors

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics: effective settings and API reachability.")

_console = Console()


async def _check_api(settings: ProbeSettings) -> tuple[bool, str]:
    [outcome] = await run_descriptors(
        [RequestDescriptor(label="doctor", path=SOURCES_PATH)],
        settings=settings,
    )
    if outcome.error is not None:
        return False, outcome.error
    count = outcome.envelope().get("count")
    detail = f"HTTP {outcome.status_code} in {outcome.elapsed_ms:.0f} ms"
    if count is not None:
        detail += f", {count} sources"
    return outcome.ok, detail


@app.command()
def run(
    base_url: str | None = typer.Option(None, "--base-url", help="Server base URL to check."),
) -> None:
    """Show the effective settings and check that the API answers."""

    try:
        settings = ProbeSettings(base_url=base_url) if base_url else ProbeSettings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = Table(title="sources-probe Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g} s")
    table.add_row("Settle delay", "OK", f"{settings.settle_seconds:g} s")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("Sources API", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] Start the server or point `--base-url` / "
            "SOURCES_PROBE_BASE_URL at it."
        )

