"""Escenario: lista de tipos de una fuente.

Toma la primera fuente configurada y pide sus categorías a
`/api/sources_manage/types`, resumiendo la forma de la respuesta.
"""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from adapters.sources_api import SOURCES_PATH, source_items, types_path
from core.config import ProbeSettings
from core.domain.models import FindingSeverity, RequestDescriptor, ScenarioReport, SourceType
from core.services.probe_runner import RunnerHooks, client_scope, execute_with_hooks

SAMPLE_SIZE = 3


class TypeTagsScenario:
    """Checks that the type list of the first source is usable."""

    name = "types"

    def __init__(self, settings: ProbeSettings | None = None) -> None:
        self._settings = settings or ProbeSettings()

    async def run(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        hooks: RunnerHooks | None = None,
    ) -> ScenarioReport:
        report = ScenarioReport(name=self.name)
        base_url = self._settings.base_url

        async with client_scope(client, self._settings) as active:
            listed = await execute_with_hooks(
                active,
                base_url,
                RequestDescriptor(label="List sources", path=SOURCES_PATH),
                hooks,
            )
            report.outcomes.append(listed)
            if not listed.ok:
                detail = listed.error or f"HTTP {listed.status_code}"
                report.note(listed.label, f"Could not list sources ({detail})", FindingSeverity.ERROR)
                report.aborted = True
                return report

            items = source_items(listed.envelope())
            code = items[0].get("code") if items else None
            if not code:
                report.note(listed.label, "No sources found", FindingSeverity.ERROR)
                report.aborted = True
                return report
            report.note(listed.label, f"Using source {items[0].get('name', '?')} ({code})")

            types = await execute_with_hooks(
                active,
                base_url,
                RequestDescriptor(label=f"Types of {code}", path=types_path(code)),
                hooks,
            )
            report.outcomes.append(types)

        if not types.ok:
            detail = types.error or f"HTTP {types.status_code}"
            report.note(types.label, f"Type list request failed ({detail})", FindingSeverity.ERROR)
            return report

        envelope = types.envelope()
        data = envelope.get("data")
        is_list = isinstance(data, list)
        report.note(
            types.label,
            f"success={envelope.get('success')} source={envelope.get('source')} "
            f"count={envelope.get('count')}",
        )
        report.note(
            types.label,
            f"data is {'a list' if is_list else type(data).__name__} "
            f"with {len(data) if is_list else 0} entries",
            FindingSeverity.INFO if is_list else FindingSeverity.WARNING,
        )
        if not is_list or not data:
            report.note(types.label, "Type data is empty", FindingSeverity.WARNING)
            return report

        for index, item in enumerate(data[:SAMPLE_SIZE], start=1):
            try:
                entry = SourceType.model_validate(item)
            except ValidationError:
                report.note(types.label, f"{index}. malformed entry: {item!r}", FindingSeverity.WARNING)
                continue
            report.note(types.label, f"{index}. type_id: {entry.type_id}, type_name: {entry.type_name}")
        return report
