"""Shared fixtures: isolated settings and clients backed by `httpx.MockTransport`."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Callable

import httpx
import pytest

from adapters.http_client import build_async_client
from core.config import ProbeSettings
from tests.fake_server import FakeSourcesServer

if TYPE_CHECKING:
    from pytest_mock import MockerFixture

BASE_URL = "http://probe.test"

JISU = {
    "code": "jisu",
    "name": "极速资源",
    "url": "https://jisuapi.com/api.php/provide/vod",
    "enabled": True,
    "is_default": False,
}

JISU_TYPES = [
    {"type_id": 1, "type_name": "电影"},
    {"type_id": 2, "type_name": "连续剧"},
    {"type_id": "3", "type_name": "综艺"},
    {"type_id": 4, "type_name": "动漫"},
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep developer env vars and .env files out of the tests."""
    for key in list(os.environ):
        if key.startswith("SOURCES_PROBE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> ProbeSettings:
    return ProbeSettings(_env_file=None, base_url=BASE_URL, settle_seconds=0.5)


@pytest.fixture
def make_client(settings: ProbeSettings) -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return build_async_client(settings, transport=httpx.MockTransport(handler))

    return _make


@pytest.fixture
def server() -> FakeSourcesServer:
    return FakeSourcesServer([JISU], types={"jisu": JISU_TYPES})


@pytest.fixture
def patch_transport(mocker: MockerFixture, settings: ProbeSettings):
    """Route clients the runner builds itself through a fake handler."""

    def _patch(handler: Callable[[httpx.Request], httpx.Response]) -> list[httpx.AsyncClient]:
        built: list[httpx.AsyncClient] = []

        def _build(_settings: ProbeSettings | None = None, **_: object) -> httpx.AsyncClient:
            client = build_async_client(_settings or settings, transport=httpx.MockTransport(handler))
            built.append(client)
            return client

        mocker.patch("core.services.probe_runner.build_async_client", side_effect=_build)
        return built

    return _patch
