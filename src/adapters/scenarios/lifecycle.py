"""Escenario: ciclo de vida de una fuente.

create -> espera -> read -> list -> update -> espera -> read -> delete

Las esperas son fijas (`settle_seconds`): el servidor guarda la configuración
en disco y la recarga, y aquí solo se observa si la lectura posterior la ve.
Una lectura que no encuentra la fuente se reporta como inconsistencia; nunca
se reintenta.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

import httpx

from adapters.sources_api import SOURCES_PATH, source_items, source_path
from core.config import ProbeSettings
from core.domain.models import (
    FindingSeverity,
    ProbeOutcome,
    RequestDescriptor,
    ScenarioReport,
    Source,
)
from core.services.probe_runner import RunnerHooks, client_scope, execute_with_hooks

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[None]]

DEBUG_SOURCE = Source(
    code="debug_test",
    name="调试测试源",
    url="https://debug-test.com/api",
    enabled=True,
    is_default=False,
)


def updated_source(source: Source) -> Source:
    return source.model_copy(
        update={"name": f"{source.name}(已更新)", "enabled": False, "is_default": True}
    )


class LifecycleScenario:
    """Creates, reads, updates and deletes a throwaway source."""

    name = "lifecycle"

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        source: Source = DEBUG_SOURCE,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        self._settings = settings or ProbeSettings()
        self._source = source
        self._sleep = sleep

    async def run(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        hooks: RunnerHooks | None = None,
    ) -> ScenarioReport:
        report = ScenarioReport(name=self.name)
        source = self._source
        changed = updated_source(source)
        base_url = self._settings.base_url

        async with client_scope(client, self._settings) as active:

            async def step(descriptor: RequestDescriptor) -> ProbeOutcome:
                outcome = await execute_with_hooks(active, base_url, descriptor, hooks)
                report.outcomes.append(outcome)
                return outcome

            created = await step(
                RequestDescriptor(
                    label=f"Create source {source.code}",
                    method="POST",
                    path=SOURCES_PATH,
                    body=source.model_dump(),
                )
            )
            if not created.ok:
                self._fail(report, created, "Create failed")
                report.aborted = True
                return report
            report.note(created.label, f"Created: {created.envelope().get('message', 'ok')}")

            await self._settle()
            read = await step(
                RequestDescriptor(label="Read back after create", path=source_path(source.code))
            )
            self._check_record(report, read, source)

            listed = await step(RequestDescriptor(label="List sources", path=SOURCES_PATH))
            self._check_listed(report, listed, source.code)

            updated = await step(
                RequestDescriptor(
                    label=f"Update source {source.code}",
                    method="PUT",
                    path=source_path(source.code),
                    body=changed.model_dump(),
                )
            )
            if updated.ok:
                report.note(updated.label, f"Updated: {updated.envelope().get('data')}")
            else:
                self._fail(report, updated, "Update failed")

            await self._settle()
            reread = await step(
                RequestDescriptor(label="Read back after update", path=source_path(source.code))
            )
            self._check_record(report, reread, changed if updated.ok else source, compare=updated.ok)

            deleted = await step(
                RequestDescriptor(
                    label=f"Delete source {source.code}",
                    method="DELETE",
                    path=source_path(source.code),
                )
            )
            if deleted.ok:
                report.note(deleted.label, f"Deleted: {deleted.envelope().get('message', 'ok')}")
            else:
                self._fail(report, deleted, "Delete failed")

        return report

    async def _settle(self) -> None:
        if self._settings.settle_seconds > 0:
            await self._sleep(self._settings.settle_seconds)

    def _fail(self, report: ScenarioReport, outcome: ProbeOutcome, what: str) -> None:
        if outcome.error is not None:
            detail = f"network error: {outcome.error}"
        else:
            detail = f"HTTP {outcome.status_code} {outcome.reason}: {self._body_text(outcome)}"
        report.note(outcome.label, f"{what} ({detail})", FindingSeverity.ERROR)

    def _body_text(self, outcome: ProbeOutcome) -> str:
        if outcome.text_body is not None:
            return outcome.preview(self._settings.body_preview_chars).strip()
        return str(outcome.json_body)

    def _check_record(
        self,
        report: ScenarioReport,
        outcome: ProbeOutcome,
        expected: Source,
        *,
        compare: bool = False,
    ) -> None:
        if not outcome.ok:
            if outcome.error is not None:
                self._fail(report, outcome, "Read failed")
                return
            message = (
                f"Inconsistency: {expected.code} should exist but the read returned "
                f"HTTP {outcome.status_code} ({self._body_text(outcome)})"
            )
            logger.warning(message)
            report.note(outcome.label, message, FindingSeverity.ERROR)
            return

        data = outcome.envelope().get("data")
        if not isinstance(data, dict) or data.get("code") != expected.code:
            message = f"Inconsistency: expected code {expected.code!r}, got {data!r}"
            logger.warning(message)
            report.note(outcome.label, message, FindingSeverity.ERROR)
            return

        report.note(outcome.label, f"Source exists: {data}")
        if compare:
            stale = _mismatched_fields(data, expected)
            if stale:
                message = "Update not visible for: " + ", ".join(stale)
                logger.warning(message)
                report.note(outcome.label, message, FindingSeverity.WARNING)

    def _check_listed(self, report: ScenarioReport, outcome: ProbeOutcome, code: str) -> None:
        if not outcome.ok:
            self._fail(report, outcome, "List failed")
            return
        envelope = outcome.envelope()
        codes = [item.get("code") for item in source_items(envelope)]
        total = envelope.get("count", len(codes))
        if code in codes:
            report.note(outcome.label, f"Found {code} in list ({total} sources)")
        else:
            message = f"Inconsistency: {code} missing from list; codes present: {codes}"
            logger.warning(message)
            report.note(outcome.label, message, FindingSeverity.ERROR)


def _mismatched_fields(data: dict[str, Any], expected: Source) -> list[str]:
    return [
        field
        for field in ("name", "enabled", "is_default")
        if data.get(field) != getattr(expected, field)
    ]
