from __future__ import annotations

from typing import Iterable

from datastore.realtime_db import build_default_database
from services.dashboard import build_default_dashboard
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    db_path = tmp_path / "realtime.json"

    monkeypatch.setenv("FLOOD_DB_NAME", "custom-db")
    monkeypatch.setenv("FLOOD_DB_PERSISTENCE_PATH", str(db_path))
    monkeypatch.setenv("FLOOD_FEED_PATH", "gauges/live")
    monkeypatch.setenv("FLOOD_HISTORY_PATH", "gaugeHistory")
    monkeypatch.setenv("FLOOD_HISTORY_ORDER", "Timestamp")
    monkeypatch.setenv("FLOOD_HISTORY_DEDUPLICATE", "off")
    monkeypatch.setenv("DASHBOARD_CLOCK_INTERVAL", "0.5")
    monkeypatch.setenv("DASHBOARD_LOCATION", "Pune")

    caches = (get_settings, build_default_database, build_default_dashboard)
    _clear_caches(caches)

    database = build_default_database()
    dashboard = build_default_dashboard()

    try:
        assert database.name == "custom-db"
        assert database.persistence_path == db_path
        assert dashboard.feed_path == "gauges/live"
        assert dashboard.history_path == "gaugeHistory"
        assert dashboard.projector.order == "timestamp"
        assert dashboard.history_logger.deduplicate is False
        assert dashboard.location == "Pune"
        assert dashboard.running is True
    finally:
        dashboard.shutdown()
        _clear_caches(caches)


def test_invalid_values_fall_back_to_defaults(monkeypatch) -> None:
    monkeypatch.setenv("FLOOD_HISTORY_ORDER", "random")
    monkeypatch.setenv("FLOOD_HISTORY_DEDUPLICATE", "maybe")
    monkeypatch.setenv("DASHBOARD_CLOCK_INTERVAL", "-1")
    monkeypatch.setenv("FLOOD_DB_PERSISTENCE_PATH", "  ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    get_settings.cache_clear()

    try:
        settings = get_settings()
        assert settings.history_order == "insertion"
        assert settings.history_deduplicate is True
        assert settings.clock_interval == 1.0
        assert settings.db_persistence_path is None
        assert settings.log_level == "DEBUG"
        assert settings.feed_path == "floodData"
    finally:
        get_settings.cache_clear()
