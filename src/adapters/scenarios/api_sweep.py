"""Escenario: barrido de endpoints.

Lista, actualiza, borra y prueba una URL remota, siempre en ese orden y sin
condicionar un paso al resultado del anterior.
"""

from __future__ import annotations

import httpx

from adapters.sources_api import SOURCES_PATH, remote_check_path, source_path
from core.config import ProbeSettings
from core.domain.models import FindingSeverity, RequestDescriptor, ScenarioReport
from core.services.probe_runner import RunnerHooks, run_descriptors

SWEEP_SOURCE = {
    "code": "jisu",
    "name": "极速资源",
    "url": "https://jisuapi.com/api.php/provide/vod",
    "enabled": True,
    "is_default": False,
}

REMOTE_CONFIG_URL = "https://example.com/sources.json"


def sweep_descriptors() -> tuple[RequestDescriptor, ...]:
    code = SWEEP_SOURCE["code"]
    return (
        RequestDescriptor(label="List sources", method="GET", path=SOURCES_PATH),
        RequestDescriptor(
            label=f"Update source {code}",
            method="PUT",
            path=source_path(code),
            body=dict(SWEEP_SOURCE),
        ),
        RequestDescriptor(label=f"Delete source {code}", method="DELETE", path=source_path(code)),
        RequestDescriptor(
            label="Test remote config URL",
            method="GET",
            path=remote_check_path(REMOTE_CONFIG_URL),
        ),
    )


class ApiSweepScenario:
    """Runs every sources endpoint once and reports what each returned."""

    name = "api"

    def __init__(self, settings: ProbeSettings | None = None) -> None:
        self._settings = settings or ProbeSettings()

    async def run(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        hooks: RunnerHooks | None = None,
    ) -> ScenarioReport:
        report = ScenarioReport(name=self.name)
        report.outcomes = await run_descriptors(
            sweep_descriptors(),
            client=client,
            hooks=hooks,
            settings=self._settings,
        )

        for outcome in report.outcomes:
            if outcome.ok:
                envelope = outcome.envelope()
                if envelope.get("success") is False:
                    message = "Server replied success=false"
                    if envelope.get("message"):
                        message += f": {envelope['message']}"
                    report.note(outcome.label, message, FindingSeverity.WARNING)
                continue
            if outcome.error is not None:
                report.note(outcome.label, f"Network error: {outcome.error}", FindingSeverity.ERROR)
            else:
                report.note(
                    outcome.label,
                    f"HTTP {outcome.status_code}: {outcome.preview(self._settings.body_preview_chars).strip()}",
                    FindingSeverity.ERROR,
                )
        return report
