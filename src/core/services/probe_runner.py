"""Sequential HTTP probe runner.

This module executes request descriptors against a base URL, one at a time,
and turns each response (or transport failure) into a `ProbeOutcome`. It never
prints: UI layers observe progress through `RunnerHooks` and render outcomes
themselves, which keeps the runner testable without capturing console output.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable, Iterable

import httpx

from adapters.http_client import build_async_client, join_url
from core.config import ProbeSettings
from core.domain.models import OutcomeKind, ProbeOutcome, RequestDescriptor

logger = logging.getLogger(__name__)


@dataclass
class RunnerHooks:
    """Optional callbacks for UI layers (narration while the run progresses)."""

    before: Callable[[RequestDescriptor], None] | None = None
    after: Callable[[ProbeOutcome], None] | None = None


@asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    settings: ProbeSettings | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield `client` untouched, or a fresh client that is closed on exit."""

    if client is not None:
        yield client
        return
    async with build_async_client(settings) as owned:
        yield owned


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000.0, 1)


def outcome_from_response(
    descriptor: RequestDescriptor,
    response: httpx.Response,
    *,
    elapsed_ms: float,
) -> ProbeOutcome:
    """Build an outcome from a received response, JSON first, raw text otherwise."""

    kind = OutcomeKind.OK if response.is_success else OutcomeKind.HTTP_ERROR

    json_body = None
    text_body: str | None = None
    try:
        json_body = response.json()
    except ValueError:
        text_body = response.text

    return ProbeOutcome(
        label=descriptor.label,
        method=descriptor.method,
        url=str(response.request.url),
        kind=kind,
        status_code=response.status_code,
        reason=response.reason_phrase,
        elapsed_ms=elapsed_ms,
        headers=dict(response.headers.items()),
        json_body=json_body,
        text_body=text_body,
    )


async def execute_descriptor(
    client: httpx.AsyncClient,
    base_url: str,
    descriptor: RequestDescriptor,
) -> ProbeOutcome:
    """Send one descriptor and return its outcome; transport errors are captured."""

    url = join_url(base_url, descriptor.path)
    headers: dict[str, str] = {}
    if descriptor.has_body:
        headers["Content-Type"] = "application/json"

    logger.debug("%s %s", descriptor.method, url)
    started = time.perf_counter()
    try:
        response = await client.request(
            descriptor.method,
            url,
            headers=headers,
            json=descriptor.body if descriptor.has_body else None,
        )
    except httpx.HTTPError as exc:
        message = str(exc) or exc.__class__.__name__
        logger.warning("%s %s failed: %s", descriptor.method, url, message)
        return ProbeOutcome(
            label=descriptor.label,
            method=descriptor.method,
            url=url,
            kind=OutcomeKind.TRANSPORT_ERROR,
            elapsed_ms=_elapsed_ms(started),
            error=message,
        )

    outcome = outcome_from_response(descriptor, response, elapsed_ms=_elapsed_ms(started))
    logger.debug("%s %s -> %s (%.1f ms)", descriptor.method, url, outcome.status_code, outcome.elapsed_ms)
    return outcome


async def execute_with_hooks(
    client: httpx.AsyncClient,
    base_url: str,
    descriptor: RequestDescriptor,
    hooks: RunnerHooks | None = None,
) -> ProbeOutcome:
    if hooks and hooks.before:
        hooks.before(descriptor)
    outcome = await execute_descriptor(client, base_url, descriptor)
    if hooks and hooks.after:
        hooks.after(outcome)
    return outcome


async def run_descriptors(
    descriptors: Iterable[RequestDescriptor],
    *,
    base_url: str | None = None,
    client: httpx.AsyncClient | None = None,
    hooks: RunnerHooks | None = None,
    settings: ProbeSettings | None = None,
) -> list[ProbeOutcome]:
    """Execute descriptors strictly in declared order.

    The next request is only sent once the previous one has fully resolved.
    No descriptor depends on an earlier outcome, so failures never stop the run.
    """

    settings = settings or ProbeSettings()
    base_url = base_url or settings.base_url

    outcomes: list[ProbeOutcome] = []
    async with client_scope(client, settings) as active:
        for descriptor in descriptors:
            outcomes.append(await execute_with_hooks(active, base_url, descriptor, hooks))
    return outcomes
