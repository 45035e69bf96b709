# agrorain/schemas.py
from __future__ import annotations
import datetime as dt
import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    # stored JSON uses camelCase (gaugeId, lastAmount, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ---- Gauge ----
class Gauge(_Model):
    id: str
    name: str = Field(..., min_length=1)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    description: Optional[str] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate_or_none(cls, v: Any) -> Optional[float]:
        # malformed coordinates are kept as "absent" instead of failing the gauge
        if v is None or isinstance(v, bool):
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return value if math.isfinite(value) else None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


# ---- RainfallRecord ----
class RainfallRecord(_Model):
    id: str
    gauge_id: str
    amount: float  # mm
    date: dt.date


# ---- derived ----
class DashboardStats(_Model):
    daily_average: float = 0.0
    max_rainfall: float = 0.0
    weekly_total: float = 0.0
    monthly_total: float = 0.0
    season_total: float = 0.0


class ChartPoint(_Model):
    day: dt.date
    label: str  # dd/MM
    amount: float = 0.0


class GaugeSummary(Gauge):
    total: float = 0.0
    last_amount: float = 0.0
    last_date: Optional[dt.date] = None
