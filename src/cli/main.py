"""Command line entry point (Typer).

Each command runs one scenario and prints its transcript: a panel per request
as it completes, then the findings and a summary table. The exit code is 0
whenever the run completes, whatever the server answered.
"""

from __future__ import annotations

import asyncio

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.scenarios import ApiSweepScenario, LifecycleScenario, TypeTagsScenario
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_findings_table,
    build_outcome_panel,
    build_request_header,
    build_summary_table,
    print_banner,
)
from core.config import ProbeSettings
from core.interfaces.scenario import ProbeScenario
from core.services.probe_runner import RunnerHooks

app = typer.Typer(
    no_args_is_help=True,
    help="Replay fixed request sequences against the sources management API.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

BaseUrlOption = typer.Option(None, "--base-url", help="Server base URL (default from settings).")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Debug logging.")


def load_settings(base_url: str | None = None, *, verbose: bool = False, **overrides: object) -> ProbeSettings:
    """Settings with CLI flags applied on top of env/.env values."""

    values = {k: v for k, v in overrides.items() if v is not None}
    if base_url:
        values["base_url"] = base_url
    if verbose:
        values["log_level"] = "DEBUG"
    try:
        settings = ProbeSettings(**values)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(settings.log_level, console=_console)
    return settings


def narration_hooks(console: Console, settings: ProbeSettings) -> RunnerHooks:
    def before(descriptor) -> None:
        console.print(build_request_header(descriptor))

    def after(outcome) -> None:
        console.print(build_outcome_panel(outcome, preview_chars=settings.body_preview_chars))
        console.print()

    return RunnerHooks(before=before, after=after)


def run_scenario(scenario: ProbeScenario, settings: ProbeSettings, *, console: Console | None = None) -> None:
    console = console or _console
    print_banner(console, title=f"sources-probe: {scenario.name}", base_url=settings.base_url)

    report = asyncio.run(scenario.run(hooks=narration_hooks(console, settings)))

    if report.findings:
        console.print(build_findings_table(report.findings))
    if report.outcomes:
        console.print(build_summary_table(report.outcomes))
    if report.aborted:
        console.print("[yellow]Scenario stopped early; see findings above.[/yellow]")
    console.print(f"[bold]Done[/bold] ({len(report.outcomes)} requests, {len(report.problems)} problems)")


@app.command()
def api(
    base_url: str | None = BaseUrlOption,
    verbose: bool = VerboseOption,
) -> None:
    """List, update, delete and remote-test endpoints, in that order."""

    settings = load_settings(base_url, verbose=verbose)
    run_scenario(ApiSweepScenario(settings), settings)


@app.command()
def lifecycle(
    base_url: str | None = BaseUrlOption,
    settle: float | None = typer.Option(
        None,
        "--settle",
        min=0,
        help="Seconds to wait between a write and the read that checks it.",
    ),
    verbose: bool = VerboseOption,
) -> None:
    """Create, read, update, read and delete a throwaway source."""

    settings = load_settings(base_url, verbose=verbose, settle_seconds=settle)
    run_scenario(LifecycleScenario(settings), settings)


@app.command()
def types(
    base_url: str | None = BaseUrlOption,
    verbose: bool = VerboseOption,
) -> None:
    """Fetch the type list of the first configured source."""

    settings = load_settings(base_url, verbose=verbose)
    run_scenario(TypeTagsScenario(settings), settings)


def run() -> None:
    app()
