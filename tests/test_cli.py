"""CLI tests: commands print a transcript and finish with exit code 0."""

from __future__ import annotations

import httpx
import pytest
from rich.console import Console
from typer.testing import CliRunner

from adapters.scenarios import LifecycleScenario
from cli.main import app
from tests.conftest import BASE_URL
from tests.fake_server import FakeSourcesServer

runner = CliRunner()


@pytest.fixture(autouse=True)
def _wide_console(mocker) -> None:
    """Wide enough that table cells never wrap mid-assertion."""

    mocker.patch("cli.main._console", Console(width=200))
    mocker.patch("cli.doctor._console", Console(width=200))


def test_api_command_prints_transcript(patch_transport, server) -> None:
    patch_transport(server)

    result = runner.invoke(app, ["api", "--base-url", BASE_URL])

    assert result.exit_code == 0, result.output
    assert "List sources" in result.output
    assert "PUT /api/sources_manage/jisu" in result.output
    assert "count: 1" in result.output
    assert "Summary" in result.output
    assert "Done (4 requests, 1 problems)" in result.output


def test_lifecycle_command_uses_settle_flag(patch_transport, server, mocker) -> None:
    patch_transport(server)
    scenario = mocker.patch("cli.main.LifecycleScenario", wraps=LifecycleScenario)

    result = runner.invoke(app, ["lifecycle", "--base-url", BASE_URL, "--settle", "0"])

    assert result.exit_code == 0, result.output
    assert "Done (6 requests, 0 problems)" in result.output
    assert scenario.call_args.args[0].settle_seconds == 0.0


def test_types_command_reports_abort(patch_transport) -> None:
    patch_transport(FakeSourcesServer([]))

    result = runner.invoke(app, ["types", "--base-url", BASE_URL])

    assert result.exit_code == 0, result.output
    assert "No sources found" in result.output
    assert "stopped early" in result.output


def test_unreachable_server_is_not_fatal(patch_transport) -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    patch_transport(refuse)

    result = runner.invoke(app, ["api", "--base-url", BASE_URL])

    assert result.exit_code == 0, result.output
    assert "Network error" in result.output


def test_invalid_base_url_is_a_usage_error() -> None:
    result = runner.invoke(app, ["api", "--base-url", "localhost:8228"])

    assert result.exit_code == 2


def test_doctor_run_reports_api_status(patch_transport, server) -> None:
    patch_transport(server)

    result = runner.invoke(app, ["doctor", "run", "--base-url", BASE_URL])

    assert result.exit_code == 0, result.output
    assert "Sources API" in result.output
    assert "1 sources" in result.output



def test_out_of_range_port_is_rejected_before_any_request(patch_transport, server) -> None:
    clients = patch_transport(server)

    result = runner.invoke(app, ["api", "--base-url", "http://localhost:99999"])

    assert result.exit_code == 2
    assert clients == []
    assert server.requests == []


def test_doctor_has_no_setup_command() -> None:
    result = runner.invoke(app, ["doctor", "setup"])

    assert result.exit_code == 2
