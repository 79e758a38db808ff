"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y User-Agent para todos los escenarios.
- Facilita testeo: los tests pasan un `httpx.MockTransport` en lugar de red real.
"""

from __future__ import annotations

import httpx

from core.config import ProbeSettings


def build_async_client(
    settings: ProbeSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` para una ejecución de probes.

    Redirects are not followed: the transcript should show the 3xx the server
    actually sent.
    """

    settings = settings or ProbeSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json, text/plain;q=0.9, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def join_url(base_url: str, path: str) -> str:
    """`base_url + path` without doubling the slash between them."""

    return base_url.rstrip("/") + path
