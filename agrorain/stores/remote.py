# agrorain/stores/remote.py
from __future__ import annotations
from typing import List

from ..schemas import Gauge, RainfallRecord
from .base import GaugeStore, RecordStore, decode_many
from .firestore import FirestoreClient

GAUGES = "gauges"
RECORDS = "records"


def _without_id(data: dict) -> dict:
    # the store assigns the document id; it is re-attached on read
    return {k: v for k, v in data.items() if k != "id"}


class RemoteGaugeStore(GaugeStore):
    live_updates = True

    def __init__(self, client: FirestoreClient):
        self.client = client

    def list_gauges(self) -> List[Gauge]:
        return decode_many(Gauge, self.client.list_documents(GAUGES), "gauge")

    def create_gauge(self, gauge: Gauge) -> None:
        self.client.create_document(GAUGES, _without_id(gauge.to_json()))

    def delete_gauge(self, gauge_id: str) -> None:
        self.client.delete_document(GAUGES, gauge_id)


class RemoteRecordStore(RecordStore):
    live_updates = True

    def __init__(self, client: FirestoreClient):
        self.client = client

    def list_records(self) -> List[RainfallRecord]:
        rows = self.client.run_query(RECORDS, order_by="date", descending=True)
        return decode_many(RainfallRecord, rows, "record")

    def create_record(self, record: RainfallRecord) -> None:
        self.client.create_document(RECORDS, _without_id(record.to_json()))
