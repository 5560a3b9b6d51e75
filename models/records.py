"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True, frozen=True)
class Reading:
    """A single water-level measurement, in centimeters."""

    level: float
    timestamp: Optional[int] = None


@dataclass(slots=True, frozen=True)
class HistoryRecord:
    """A reading as stored in the history log.

    ``water_level`` is ``None`` when the stored record carries no usable level.
    """

    water_level: Optional[float]
    timestamp: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        return {"waterLevel": self.water_level, "timestamp": self.timestamp}


@dataclass(slots=True, frozen=True)
class SeriesPoint:
    """One charted point of the projected history."""

    index: int
    level: float
