"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from services.classifier import RiskStatus


class ReadingAccepted(BaseModel):
    """Immediate response payload after writing to the feed node."""

    accepted: bool = Field(..., description="Whether the payload carried a usable water level.")
    water_level: float = Field(..., ge=0, description="Current water level in centimeters.")
    status: RiskStatus


class SeriesPoint(BaseModel):
    index: int = Field(..., ge=1)
    level: float


class Threshold(BaseModel):
    """Reference line for the trend chart."""

    status: RiskStatus
    level: float
    color: str


class StatusResponse(BaseModel):
    level: float
    status: RiskStatus
    color: str


class DashboardSnapshot(BaseModel):
    """Full dashboard view: current reading, status, history and clock."""

    water_level: float = Field(..., ge=0)
    unit: str = "cm"
    status: RiskStatus
    status_color: str
    alert: bool = Field(..., description="True when the status is DANGER.")
    min_level: Union[float, str] = Field(..., description='Lowest logged level, or "-" without history.')
    max_level: Union[float, str] = Field(..., description='Highest logged level, or "-" without history.')
    history: List[SeriesPoint] = Field(default_factory=list)
    thresholds: List[Threshold] = Field(default_factory=list)
    time: Optional[datetime] = None
    location: str = ""
