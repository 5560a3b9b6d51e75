"""Extraction of readings from raw feed payloads."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from models.records import Reading

logger = logging.getLogger(__name__)

LEVEL_FIELD = "waterLevel"
TIMESTAMP_FIELD = "timestamp"


def coerce_level(value: Any) -> Optional[float]:
    """Return ``value`` as a finite, non-negative float, or ``None``."""

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    level = float(value)
    if not math.isfinite(level) or level < 0:
        return None
    return level


def coerce_timestamp(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


class ReadingIngestor:
    """Turns decoded feed payloads into :class:`Reading` objects."""

    def on_reading(self, raw_value: Any) -> Optional[Reading]:
        if not isinstance(raw_value, Mapping):
            if raw_value is not None:
                logger.warning(
                    "Ignoring feed payload",
                    extra={"reason": "payload is not a mapping", "invalid_value": repr(raw_value)},
                )
            return None

        raw_level = raw_value.get(LEVEL_FIELD)
        if raw_level is None:
            logger.debug("Ignoring feed payload", extra={"reason": f"missing {LEVEL_FIELD}"})
            return None

        level = coerce_level(raw_level)
        if level is None:
            logger.warning(
                "Ignoring feed payload",
                extra={"reason": f"invalid {LEVEL_FIELD}", "invalid_value": repr(raw_level)},
            )
            return None

        return Reading(level=level, timestamp=coerce_timestamp(raw_value.get(TIMESTAMP_FIELD)))
