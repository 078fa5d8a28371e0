"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from lib.amino.cli import cli
from tests.fake_device import FakeAminoTransport

TARGET = ["--target", "10.231.64.92", "--password", "root2root"]


@pytest.fixture(autouse=True)
def fake_transport(monkeypatch: pytest.MonkeyPatch, transport: FakeAminoTransport) -> None:
    """Route every CLI connection to the fake transport."""
    monkeypatch.setattr("lib.amino.device.PexpectTransport", lambda host, port: transport)


def test_stats_text() -> None:
    """Test statistics rendered as text."""
    result = CliRunner().invoke(cli, ["stats", *TARGET, "--quiet"])
    assert result.exit_code == 0
    assert "kernelVersion" in result.output
    assert "3.10.79-amino" in result.output
    assert "62.500" in result.output


def test_stats_json() -> None:
    """Test statistics rendered as JSON."""
    result = CliRunner().invoke(cli, ["stats", *TARGET, "--json", "--quiet"])
    assert result.exit_code == 0

    data = json.loads(result.output)
    assert data["success"] is True
    assert data["numberOfProcesses"] == 57
    assert data["networkIn"] is None
    assert "controls" not in data


def test_stats_count(transport: FakeAminoTransport) -> None:
    """Test repeated polls over one session."""
    result = CliRunner().invoke(
        cli,
        ["stats", *TARGET, "--json", "--quiet", "--count", "2", "--interval", "0"],
    )
    assert result.exit_code == 0

    lines = result.output.strip().splitlines()
    assert len(lines) == 2
    assert transport.opened == 1
    assert transport.commands.count("ifconfig eth0") == 2


def test_stats_login_failure() -> None:
    """Test authentication failure exits non-zero."""
    result = CliRunner().invoke(cli, ["stats", "--target", "10.231.64.92", "--password", "bad", "--quiet"])
    assert result.exit_code == 1


def test_stats_login_failure_json() -> None:
    """Test authentication failure reported as JSON."""
    result = CliRunner().invoke(
        cli,
        ["stats", "--target", "10.231.64.92", "--password", "bad", "--json", "--quiet"],
    )
    assert result.exit_code == 1
    data = json.loads(result.output.strip().splitlines()[-1])
    assert data["success"] is False
    assert "Login incorrect" in data["error"]


def test_reboot(transport: FakeAminoTransport) -> None:
    """Test reboot command."""
    result = CliRunner().invoke(cli, ["reboot", *TARGET, "--quiet"])
    assert result.exit_code == 0
    assert "Reboot sent" in result.output
    assert transport.commands == ["reboot"]


def test_execute() -> None:
    """Test raw command execution."""
    result = CliRunner().invoke(cli, ["execute", *TARGET, "--quiet", "uname -r"])
    assert result.exit_code == 0
    assert "3.10.79-amino" in result.output


def test_execute_not_found() -> None:
    """Test unknown command exits non-zero."""
    result = CliRunner().invoke(cli, ["execute", *TARGET, "--quiet", "--json", "bogus"])
    assert result.exit_code == 1
    assert json.loads(result.output.strip().splitlines()[-1])["command"] == "bogus"
