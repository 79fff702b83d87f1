"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SensorStatus(str, Enum):
    """Where the current reading sits relative to the window average."""

    above = "above"
    below = "below"
    equal = "equal"


class SensorSummaryModel(BaseModel):
    current_value: float
    average: float


class SensorPanel(BaseModel):
    """Display-ready view of one sensor slot."""

    name: str
    label: str
    unit: str = ""
    summary: Optional[SensorSummaryModel] = None
    status: Optional[SensorStatus] = None
    status_label: Optional[str] = None
    current_display: Optional[str] = None
    average_display: Optional[str] = None
    error: Optional[str] = Field(
        default=None, description="Per-sensor failure message when failures are isolated."
    )
    loading: bool = Field(
        default=False, description="True when neither a summary nor an error is available."
    )


class DashboardResponse(BaseModel):
    """Full dashboard payload consumed by the web page."""

    sensors: List[SensorPanel] = Field(default_factory=list)
    error: Optional[str] = None
    fetched_at: datetime
