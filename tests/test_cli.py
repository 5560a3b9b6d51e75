from __future__ import annotations

from typing import Any, Dict, List

import pytest
from typer.testing import CliRunner

from cli.app import app
from cli.config import load_config


class StubClient:
    def __init__(self, config) -> None:
        self.config = config
        self.pushed: List[float] = []
        self.dashboard_calls = 0
        self.history: List[Dict[str, Any]] = [
            {"index": 1, "level": 42.0},
            {"index": 2, "level": 81.0},
        ]
        self.dashboard_payload: Dict[str, Any] = {
            "water_level": 81.0,
            "unit": "cm",
            "status": "DANGER",
            "status_color": "#ef4444",
            "alert": True,
            "min_level": 42.0,
            "max_level": 81.0,
            "history": self.history,
            "thresholds": [
                {"status": "WARNING", "level": 40.0, "color": "#facc15"},
                {"status": "DANGER", "level": 70.0, "color": "#ef4444"},
            ],
            "time": "2024-06-01T12:00:00+00:00",
            "location": "Solapur, Maharashtra",
        }
        self.closed = False

    def push_reading(self, level: float) -> Dict[str, Any]:
        self.pushed.append(level)
        return {"accepted": True, "water_level": level, "status": "WARNING"}

    def get_dashboard(self) -> Dict[str, Any]:
        self.dashboard_calls += 1
        return self.dashboard_payload

    def get_history(self) -> List[Dict[str, Any]]:
        return self.history

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def stub(monkeypatch) -> StubClient:
    client = StubClient(config=None)

    def factory(config):
        client.config = config
        return client

    monkeypatch.setattr("cli.app.ApiClient", factory)
    return client


def test_push_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["push", "55"])

    assert result.exit_code == 0
    assert stub.pushed == [55.0]
    assert "status: WARNING" in result.stdout
    assert stub.closed is True


def test_push_rejects_negative_level(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["push", "--", "-3"])

    assert result.exit_code != 0
    assert stub.pushed == []


def test_dashboard_command(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["--base-url", "http://gauge:9000/", "dashboard"])

    assert result.exit_code == 0
    assert "Flood Risk Detected" in result.stdout
    assert "min: 42.0 cm" in result.stdout
    assert "2: 81.0 cm" in result.stdout
    assert stub.config.base_url == "http://gauge:9000"


def test_history_command_without_records(runner: CliRunner, stub: StubClient) -> None:
    stub.history = []

    result = runner.invoke(app, ["history"])

    assert result.exit_code == 0
    assert "No history recorded." in result.stdout


def test_watch_command_stops_after_count(runner: CliRunner, stub: StubClient) -> None:
    result = runner.invoke(app, ["watch", "--count", "3", "--poll-interval", "0.001"])

    assert result.exit_code == 0
    assert stub.dashboard_calls == 3
    assert result.stdout.count("Flood Monitoring Dashboard") == 3


def test_load_config_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("API_BASE_URL", "http://env-host:8080/")
    monkeypatch.setenv("CLI_POLL_INTERVAL", "2.5")
    monkeypatch.setenv("CLI_REQUEST_TIMEOUT", "not-a-number")

    config = load_config()

    assert config.base_url == "http://env-host:8080"
    assert config.poll_interval == 2.5
    assert config.request_timeout == 30.0
