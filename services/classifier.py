"""Flood-risk tiers for a water level."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RiskStatus(str, Enum):
    SAFE = "SAFE"
    WARNING = "WARNING"
    DANGER = "DANGER"


WARNING_LEVEL_CM = 40.0
DANGER_LEVEL_CM = 70.0

STATUS_COLORS = {
    RiskStatus.SAFE: "#22c55e",
    RiskStatus.WARNING: "#facc15",
    RiskStatus.DANGER: "#ef4444",
}


@dataclass(frozen=True)
class ThresholdMarker:
    """Horizontal reference line drawn on the trend chart."""

    status: RiskStatus
    level: float
    color: str


class StatusClassifier:
    """Pure level-to-tier mapping.

    Thresholds are lower bounds of the higher tier: a level of exactly 40 is
    WARNING and exactly 70 is DANGER. There is no hysteresis, so a level
    hovering around a threshold flips status on every reading.
    """

    def __init__(
        self,
        warning_level: float = WARNING_LEVEL_CM,
        danger_level: float = DANGER_LEVEL_CM,
    ) -> None:
        if warning_level >= danger_level:
            raise ValueError("warning_level must be below danger_level.")
        self.warning_level = warning_level
        self.danger_level = danger_level

    def classify(self, level: float) -> RiskStatus:
        if level < self.warning_level:
            return RiskStatus.SAFE
        if level < self.danger_level:
            return RiskStatus.WARNING
        return RiskStatus.DANGER

    def markers(self) -> list[ThresholdMarker]:
        return [
            ThresholdMarker(RiskStatus.WARNING, self.warning_level, STATUS_COLORS[RiskStatus.WARNING]),
            ThresholdMarker(RiskStatus.DANGER, self.danger_level, STATUS_COLORS[RiskStatus.DANGER]),
        ]

    @staticmethod
    def color_for(status: RiskStatus) -> str:
        return STATUS_COLORS[status]
