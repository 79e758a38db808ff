"""Rendering tests: outcomes and findings as they appear in the transcript."""

from __future__ import annotations

from rich.console import Console

from cli.ui_components import (
    build_findings_table,
    build_outcome_panel,
    build_request_header,
    build_summary_table,
)
from core.domain.models import (
    Finding,
    FindingSeverity,
    OutcomeKind,
    ProbeOutcome,
    RequestDescriptor,
)


def _render(renderable) -> str:
    console = Console(record=True, width=120, color_system=None)
    console.print(renderable)
    return console.export_text()


def _outcome(**kwargs) -> ProbeOutcome:
    base = {
        "label": "List sources",
        "method": "GET",
        "url": "http://probe.test/api/sources_manage",
        "kind": OutcomeKind.OK,
        "status_code": 200,
        "reason": "OK",
        "elapsed_ms": 12.3,
    }
    base.update(kwargs)
    return ProbeOutcome(**base)


def test_json_outcome_shows_envelope_summary() -> None:
    outcome = _outcome(
        headers={"content-type": "application/json"},
        json_body={"success": True, "count": 2, "data": [{"code": "a"}, {"code": "b"}]},
    )

    text = _render(build_outcome_panel(outcome))

    assert "200 OK" in text
    assert "12.3 ms" in text
    assert "success: True" in text
    assert "count: 2" in text
    assert "content-type" in text
    assert '"code": "a"' in text


def test_text_outcome_is_truncated() -> None:
    outcome = _outcome(text_body="y" * 50)

    text = _render(build_outcome_panel(outcome, preview_chars=10))

    assert "yyyyyyyyyy..." in text
    assert "y" * 11 not in text


def test_http_error_outcome_shows_body() -> None:
    outcome = _outcome(kind=OutcomeKind.HTTP_ERROR, status_code=404, reason="Not Found", text_body="Source not found\n")

    text = _render(build_outcome_panel(outcome))

    assert "404 Not Found" in text
    assert "Source not found" in text


def test_transport_outcome_shows_error() -> None:
    outcome = _outcome(kind=OutcomeKind.TRANSPORT_ERROR, status_code=None, reason="", error="Connection refused")

    text = _render(build_outcome_panel(outcome))

    assert "Network error: Connection refused" in text


def test_request_header_includes_body() -> None:
    descriptor = RequestDescriptor(label="Update", method="PUT", path="/api/sources_manage/jisu", body={"code": "jisu"})

    text = _render(build_request_header(descriptor))

    assert "PUT /api/sources_manage/jisu" in text
    assert '"code": "jisu"' in text


def test_tables_keep_order() -> None:
    findings = [
        Finding(step="one", message="first"),
        Finding(step="two", message="second", severity=FindingSeverity.ERROR),
    ]
    outcomes = [_outcome(label="a"), _outcome(label="b", kind=OutcomeKind.TRANSPORT_ERROR, status_code=None)]

    findings_text = _render(build_findings_table(findings))
    summary_text = _render(build_summary_table(outcomes))

    assert findings_text.index("first") < findings_text.index("second")
    assert "ERROR" in findings_text
    assert summary_text.index(" a ") < summary_text.index(" b ")
    assert "ERR" in summary_text
