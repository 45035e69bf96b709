# agrorain/stores/local.py
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .. import config
from ..db import get_session
from ..errors import StoreError
from ..models import KeyValue
from ..schemas import Gauge, RainfallRecord
from .base import GaugeStore, RecordStore, decode_many

log = logging.getLogger(__name__)


class KeyValueDocument:
    """A JSON array stored under one key, rewritten completely on every change."""

    def __init__(self, factory: sessionmaker, key: str):
        self.factory = factory
        self.key = key

    def read(self) -> List[dict]:
        try:
            with get_session(self.factory) as s:
                row = s.get(KeyValue, self.key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(f"Local storage read failed ({self.key}): {exc}") from exc
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            log.warning("local key %s does not hold valid JSON, treating it as empty", self.key)
            return []
        if not isinstance(data, list):
            log.warning("local key %s does not hold a JSON array, treating it as empty", self.key)
            return []
        return data

    def write(self, items: List[dict]) -> None:
        table = KeyValue.__table__
        payload = json.dumps(items, ensure_ascii=False)
        now = datetime.now(timezone.utc)
        stmt = (
            sqlite_insert(table)
            .values(key=self.key, value=payload, updated_at=now)
            .on_conflict_do_update(
                index_elements=[table.c.key],
                set_={"value": payload, "updated_at": now},
            )
        )
        try:
            with get_session(self.factory) as s:
                s.execute(stmt)
                s.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Local storage write failed ({self.key}): {exc}") from exc


class LocalGaugeStore(GaugeStore):
    live_updates = False

    def __init__(self, factory: sessionmaker, key: str = config.LOCAL_GAUGES_KEY):
        self.doc = KeyValueDocument(factory, key)

    def list_gauges(self) -> List[Gauge]:
        return decode_many(Gauge, self.doc.read(), "gauge")

    def create_gauge(self, gauge: Gauge) -> None:
        items = self.doc.read()
        if any(isinstance(i, dict) and i.get("id") == gauge.id for i in items):
            raise StoreError(f"Gauge {gauge.id} already exists")
        items.append(gauge.to_json())
        self.doc.write(items)

    def delete_gauge(self, gauge_id: str) -> None:
        items = self.doc.read()
        kept = [i for i in items if not (isinstance(i, dict) and i.get("id") == gauge_id)]
        self.doc.write(kept)


class LocalRecordStore(RecordStore):
    live_updates = False

    def __init__(self, factory: sessionmaker, key: str = config.LOCAL_RECORDS_KEY):
        self.doc = KeyValueDocument(factory, key)

    def list_records(self) -> List[RainfallRecord]:
        return decode_many(RainfallRecord, self.doc.read(), "record")

    def create_record(self, record: RainfallRecord) -> None:
        items = self.doc.read()
        if any(isinstance(i, dict) and i.get("id") == record.id for i in items):
            raise StoreError(f"Record {record.id} already exists")
        # newest first; ISO dates sort chronologically as strings
        items = [record.to_json()] + items
        items.sort(key=lambda i: str(i.get("date", "")) if isinstance(i, dict) else "", reverse=True)
        self.doc.write(items)
