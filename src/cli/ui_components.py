"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- El runner devuelve resultados; aquí solo se decide cómo se ven.
- Permite reutilizar paneles/tablas en todos los comandos.
"""

from __future__ import annotations

import json
from typing import Iterable

from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    Finding,
    FindingSeverity,
    OutcomeKind,
    ProbeOutcome,
    RequestDescriptor,
)

_KIND_STYLE = {
    OutcomeKind.OK: "green",
    OutcomeKind.HTTP_ERROR: "red",
    OutcomeKind.TRANSPORT_ERROR: "magenta",
}

_SEVERITY_STYLE = {
    FindingSeverity.INFO: "green",
    FindingSeverity.WARNING: "yellow",
    FindingSeverity.ERROR: "red",
}


def print_banner(console: Console, *, title: str, base_url: str) -> None:
    body = Align.center(
        Text.assemble(Text(title, style="bold cyan"), "\n", Text(base_url, style="dim")),
        vertical="middle",
    )
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_request_header(descriptor: RequestDescriptor) -> Text:
    """Line printed before a request is sent."""

    text = Text()
    text.append(f"{descriptor.label}\n", style="bold")
    text.append(f"{descriptor.method} {descriptor.path}", style="cyan")
    if descriptor.has_body:
        text.append("\nbody: ", style="dim")
        text.append(json.dumps(descriptor.body, ensure_ascii=False, indent=2))
    return text


def build_headers_table(headers: dict[str, str]) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Header", style="dim", no_wrap=True)
    table.add_column("Value", style="white")
    for key, value in headers.items():
        table.add_row(key, Text(value))
    return table


def build_outcome_panel(outcome: ProbeOutcome, *, preview_chars: int = 200) -> Panel:
    """Panel con estado, tiempo, headers y cuerpo de una respuesta."""

    style = _KIND_STYLE[outcome.kind]
    title = Text(f"{outcome.method} {outcome.url}", style=f"bold {style}")

    if outcome.kind is OutcomeKind.TRANSPORT_ERROR:
        body = Text.assemble(
            ("Network error: ", "bold magenta"),
            outcome.error or "",
            (f"\nafter {outcome.elapsed_ms:.1f} ms", "dim"),
        )
        return Panel(body, title=title, border_style=style)

    parts: list[RenderableType] = [
        Text.assemble(
            ("Status: ", "bold"),
            (f"{outcome.status_code} {outcome.reason}", style),
            ("    Time: ", "bold"),
            f"{outcome.elapsed_ms:.1f} ms",
        )
    ]

    envelope = outcome.envelope()
    summary = Text()
    if "success" in envelope:
        summary.append(f"success: {envelope['success']}\n")
    if envelope.get("message"):
        summary.append(f"message: {envelope['message']}\n")
    if "count" in envelope:
        summary.append(f"count: {envelope['count']}\n")
    if summary:
        summary.rstrip()
        parts.append(summary)

    if outcome.headers:
        parts.append(Text("Headers", style="bold"))
        parts.append(build_headers_table(outcome.headers))

    parts.append(Text("Body", style="bold"))
    if outcome.is_json:
        parts.append(Text(json.dumps(outcome.json_body, ensure_ascii=False, indent=2)))
    else:
        parts.append(Text(outcome.preview(preview_chars) or "(empty)", style="yellow"))

    return Panel(Group(*parts), title=title, border_style=style)


def build_findings_table(findings: Iterable[Finding]) -> Table:
    table = Table(title="Findings")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Message", style="white")
    for finding in findings:
        table.add_row(
            finding.step,
            Text(finding.severity.value.upper(), style=_SEVERITY_STYLE[finding.severity]),
            Text(finding.message),
        )
    return table


def build_summary_table(outcomes: Iterable[ProbeOutcome]) -> Table:
    table = Table(title="Summary")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Request", style="cyan")
    table.add_column("Status", no_wrap=True)
    table.add_column("Time (ms)", justify="right")
    for index, outcome in enumerate(outcomes, start=1):
        status = str(outcome.status_code) if outcome.status_code is not None else "ERR"
        table.add_row(
            str(index),
            Text(outcome.label),
            Text(status, style=_KIND_STYLE[outcome.kind]),
            f"{outcome.elapsed_ms:.1f}",
        )
    return table
