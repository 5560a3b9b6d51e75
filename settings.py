from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DB_NAME_ENV = "FLOOD_DB_NAME"
_DB_PATH_ENV = "FLOOD_DB_PERSISTENCE_PATH"
_FEED_PATH_ENV = "FLOOD_FEED_PATH"
_HISTORY_PATH_ENV = "FLOOD_HISTORY_PATH"
_HISTORY_ORDER_ENV = "FLOOD_HISTORY_ORDER"
_HISTORY_DEDUP_ENV = "FLOOD_HISTORY_DEDUPLICATE"
_CLOCK_INTERVAL_ENV = "DASHBOARD_CLOCK_INTERVAL"
_LOCATION_ENV = "DASHBOARD_LOCATION"
_LOG_LEVEL_ENV = "LOG_LEVEL"

HISTORY_ORDERS = ("insertion", "timestamp")
_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    db_name: str
    db_persistence_path: Optional[str]
    feed_path: str
    history_path: str
    history_order: str
    history_deduplicate: bool
    clock_interval: float
    location: str
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip().lower()
    if candidate in _TRUTHY:
        return True
    if candidate in _FALSY:
        return False
    return default


def _read_clock_interval(default: float) -> float:
    value = os.getenv(_CLOCK_INTERVAL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_history_order(default: str) -> str:
    candidate = _read_str_env(_HISTORY_ORDER_ENV, default).lower()
    return candidate if candidate in HISTORY_ORDERS else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        db_name=_read_str_env(_DB_NAME_ENV, "flood-monitor"),
        db_persistence_path=_read_optional_env(_DB_PATH_ENV, "./tmp/realtime_db.json"),
        feed_path=_read_str_env(_FEED_PATH_ENV, "floodData"),
        history_path=_read_str_env(_HISTORY_PATH_ENV, "floodHistory"),
        history_order=_read_history_order("insertion"),
        history_deduplicate=_read_bool_env(_HISTORY_DEDUP_ENV, True),
        clock_interval=_read_clock_interval(1.0),
        location=_read_str_env(_LOCATION_ENV, "Solapur, Maharashtra"),
        log_level=_read_log_level("INFO"),
    )
