# agrorain/stores/base.py
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..schemas import Gauge, RainfallRecord
from .subscription import Subscription

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def decode_many(model: Type[M], rows: Iterable[dict], kind: str) -> List[M]:
    """Validates stored rows, skipping (and logging) the ones that do not fit."""
    out: List[M] = []
    for row in rows:
        try:
            out.append(model.model_validate(row))
        except ValidationError as exc:
            log.warning("skipping malformed %s %r: %s", kind, row.get("id") if isinstance(row, dict) else row, exc)
    return out


class GaugeStore(ABC):
    # True: the backend pushes fresh snapshots after writes (remote).
    # False: listings are static after load, callers update their own state.
    live_updates: bool = False

    @abstractmethod
    def list_gauges(self) -> List[Gauge]: ...

    @abstractmethod
    def create_gauge(self, gauge: Gauge) -> None: ...

    @abstractmethod
    def delete_gauge(self, gauge_id: str) -> None: ...

    def watch_gauges(self, interval: Optional[float] = None) -> Subscription[Gauge]:
        return Subscription(self.list_gauges, interval=interval, once=not self.live_updates, name="gauges")


class RecordStore(ABC):
    live_updates: bool = False

    @abstractmethod
    def list_records(self) -> List[RainfallRecord]: ...

    @abstractmethod
    def create_record(self, record: RainfallRecord) -> None: ...

    def watch_records(self, interval: Optional[float] = None) -> Subscription[RainfallRecord]:
        return Subscription(self.list_records, interval=interval, once=not self.live_updates, name="records")
