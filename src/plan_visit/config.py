from __future__ import annotations

import json
import logging
import math
import os
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from plan_visit.errors import ConfigurationError
from plan_visit.models.geo import Waypoint
from plan_visit.models.mission_plan import ZUnits

logger = logging.getLogger(__name__)

DEFAULT_PLAN_ID = "PlanVisit"
DEFAULT_PLAN_DESCRIPTION = "Visiting given points in optimal order based on range"


class VisitSettings(BaseModel):
    # flat [lat0, lon0, lat1, lon1, ...] in degrees; validity is checked when applied
    points_to_visit: list[float] = Field(default_factory=list)
    speed_mps: float = Field(default=1.6, gt=0)
    z: float = 0.0
    z_units: ZUnits = ZUnits.DEPTH
    plan_id: str = DEFAULT_PLAN_ID
    plan_description: str = DEFAULT_PLAN_DESCRIPTION
    system_id: int = Field(default=0, ge=0)
    max_waypoints: int = Field(default=10, ge=0, description="Operational ceiling for the exact solver")
    poll_interval_s: float = Field(default=1.0, gt=0)
    queue_size: int = Field(default=64, ge=1)


def waypoints_from_degrees(points: Sequence[float]) -> list[Waypoint]:
    """
    Convert a flat lat/lon list in degrees into radian waypoints.

    The input is never modified, so repeated calls on the same configuration
    always yield the same result.
    """
    if len(points) % 2 != 0:
        raise ConfigurationError(
            f"Odd number of points to visit ({len(points)} values); expected lat/lon pairs"
        )
    wps: list[Waypoint] = []
    for i in range(0, len(points), 2):
        try:
            lat_deg, lon_deg = float(points[i]), float(points[i + 1])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"point {i // 2} is not numeric: {e}") from e
        if not (math.isfinite(lat_deg) and math.isfinite(lon_deg)):
            raise ConfigurationError(f"point {i // 2} is not finite: ({lat_deg}, {lon_deg})")
        try:
            wps.append(Waypoint(lat=math.radians(lat_deg), lon=math.radians(lon_deg)))
        except ValidationError as e:
            raise ConfigurationError(f"point {i // 2} out of range: {e}") from e
    return wps


def _env_overrides() -> dict:
    out: dict = {}
    raw = os.getenv("PLANVISIT_POINTS")
    if raw is not None:
        out["points_to_visit"] = [float(v) for v in raw.replace(";", ",").split(",") if v.strip()]
    if os.getenv("PLANVISIT_SPEED_MPS"):
        out["speed_mps"] = float(os.environ["PLANVISIT_SPEED_MPS"])
    if os.getenv("PLANVISIT_SYSTEM_ID"):
        out["system_id"] = int(os.environ["PLANVISIT_SYSTEM_ID"])
    if os.getenv("PLANVISIT_MAX_WAYPOINTS"):
        out["max_waypoints"] = int(os.environ["PLANVISIT_MAX_WAYPOINTS"])
    return out


def load_settings(path: str | Path | None = None) -> VisitSettings:
    """Read settings from a JSON file (optional) and apply ``PLANVISIT_*`` env overrides."""
    data: dict = {}
    if path is not None:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"cannot read settings from {path}: {e}") from e
    try:
        data.update(_env_overrides())
        settings = VisitSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigurationError(str(e)) from e
    logger.debug("loaded settings: %s", settings.model_dump(exclude={"points_to_visit"}))
    return settings
