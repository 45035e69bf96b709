# agrorain/forms.py
from __future__ import annotations
import datetime as dt
import uuid
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import FormError
from .schemas import Gauge, RainfallRecord


def _decimal(v: Any) -> Any:
    # "-23,5" is how coordinates are usually typed here
    if isinstance(v, str):
        return v.strip().replace(",", ".")
    return v


# ---- form inputs (presence + type only) ----
class GaugeIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    latitude: float = Field(..., allow_inf_nan=False)
    longitude: float = Field(..., allow_inf_nan=False)
    description: Optional[str] = None

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _decimal_comma(cls, v: Any) -> Any:
        return _decimal(v)

    @field_validator("description")
    @classmethod
    def _empty_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class RecordIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    gauge_id: str = Field(..., min_length=1)
    amount: float = Field(..., allow_inf_nan=False)
    date: dt.date

    @field_validator("amount", mode="before")
    @classmethod
    def _decimal_comma(cls, v: Any) -> Any:
        return _decimal(v)


def _refuse(exc: ValidationError) -> FormError:
    fields = [".".join(str(p) for p in e["loc"]) for e in exc.errors()]
    return FormError(f"Campos inválidos ou vazios: {', '.join(fields)}", fields=fields)


def new_id() -> str:
    return str(uuid.uuid4())


def gauge_from_form(name: Any, latitude: Any, longitude: Any, description: Any = None) -> Gauge:
    try:
        data = GaugeIn(name=name, latitude=latitude, longitude=longitude, description=description)
    except ValidationError as exc:
        raise _refuse(exc) from exc
    return Gauge(id=new_id(), **data.model_dump())


def record_from_form(gauge_id: Any, amount: Any, date: Any) -> RainfallRecord:
    try:
        data = RecordIn(gauge_id=gauge_id, amount=amount, date=date)
    except ValidationError as exc:
        raise _refuse(exc) from exc
    return RainfallRecord(id=new_id(), **data.model_dump())
