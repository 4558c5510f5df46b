# src/plan_visit/models/geo.py
"""
Geographic points handled by the planner.

All coordinates are stored in radians; conversion from degrees happens once,
when the configuration is applied (see ``plan_visit.config``).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Waypoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-1.5707963267948966, le=1.5707963267948966)
    lon: float


class Position(BaseModel):
    """Vehicle latitude/longitude snapshot (radians)."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float
