"""Append-only logging of accepted readings."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from datastore.realtime_db import MockRealtimeDatabase
from models.records import HistoryRecord, Reading

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


class HistoryLogger:
    """Writes a history record when the current level changes.

    A level of exactly zero is the feed's "no real reading yet" value and is
    never logged. With ``deduplicate`` on (the default) a reading equal to the
    previous reading is skipped, so only changes of the current level are
    logged. With it off, every non-zero reading produces one record.
    """

    def __init__(
        self,
        database: MockRealtimeDatabase,
        path: str,
        deduplicate: bool = True,
        clock: Callable[[], int] = _now_ms,
    ) -> None:
        self.database = database
        self.path = path
        self.deduplicate = deduplicate
        self._clock = clock
        self._previous_level: Optional[float] = None

    def append(self, reading: Reading) -> bool:
        """Push ``reading`` to the history log; return whether a record was written."""
        previous, self._previous_level = self._previous_level, reading.level
        if reading.level == 0:
            logger.debug("Skipping history record", extra={"reason": "no reading yet"})
            return False
        if self.deduplicate and reading.level == previous:
            logger.debug(
                "Skipping history record",
                extra={"reason": "unchanged level", "water_level": reading.level},
            )
            return False

        record = HistoryRecord(water_level=reading.level, timestamp=self._clock())
        try:
            record_key = self.database.push(self.path, record.to_payload())
        except OSError:
            logger.exception(
                "Failed to write history record",
                extra={"path": self.path, "water_level": reading.level},
            )
            return False

        logger.info(
            "History record written",
            extra={"path": self.path, "record_key": record_key, "water_level": reading.level},
        )
        return True
