"""Endpoints of the sources management API.

Paths only; every request built from them goes through the probe runner.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

SOURCES_PATH = "/api/sources_manage"


def source_path(code: str) -> str:
    return f"{SOURCES_PATH}/{quote(code, safe='')}"


def types_path(code: str) -> str:
    return f"{SOURCES_PATH}/types?{urlencode({'source': code})}"


def remote_check_path(url: str) -> str:
    return f"{SOURCES_PATH}/test_remote?{urlencode({'url': url})}"


def source_items(envelope: dict[str, Any]) -> list[dict[str, Any]]:
    """Source records from a list reply.

    The server answers `{success, count, data}`; some older builds used a
    `sources` key instead, so it is accepted as a fallback.
    """

    items = envelope.get("data")
    if not isinstance(items, list):
        items = envelope.get("sources")
    if not isinstance(items, list):
        return []
    return [item for item in items if isinstance(item, dict)]
