import json
from datetime import date

import pytest
import requests

from agrorain.errors import StoreError
from agrorain.schemas import Gauge, RainfallRecord
from agrorain.stores import open_backend
from agrorain.stores.factory import NOTICE_NOT_CONFIGURED
from agrorain.stores.firestore import FirestoreClient, decode_value, encode_fields
from agrorain.stores.remote import RemoteGaugeStore, RemoteRecordStore

BASE = "https://firestore.test/v1"
DOCS = f"{BASE}/projects/agrorain-test/databases/(default)/documents"


def make_response(status=200, body=None):
    resp = requests.Response()
    resp.status_code = status
    resp._content = json.dumps(body).encode("utf-8") if body is not None else b""
    resp.url = DOCS
    return resp


class FakeSession:
    """Serves queued responses and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def client_with(*responses, api_key="k123"):
    session = FakeSession(*responses)
    return FirestoreClient("agrorain-test", api_key, base_url=BASE, session=session), session


def doc(collection, id_, **fields):
    return {"name": f"projects/agrorain-test/databases/(default)/documents/{collection}/{id_}", "fields": fields}


def test_value_codec():
    fields = encode_fields({"name": "Sede", "latitude": -23.5, "count": 2, "description": None, "ok": True})
    assert fields == {
        "name": {"stringValue": "Sede"},
        "latitude": {"doubleValue": -23.5},
        "count": {"integerValue": "2"},
        "description": {"nullValue": None},
        "ok": {"booleanValue": True},
    }
    assert decode_value({"integerValue": "7"}) == 7
    assert decode_value({"mapValue": {"fields": {"a": {"doubleValue": 1.5}}}}) == {"a": 1.5}
    assert decode_value({"arrayValue": {}}) == []


def test_list_documents_follows_pages_and_reattaches_ids():
    client, session = client_with(
        make_response(body={
            "documents": [doc("gauges", "abc", name={"stringValue": "Sede"})],
            "nextPageToken": "p2",
        }),
        make_response(body={"documents": [doc("gauges", "def", name={"stringValue": "Norte"})]}),
    )
    rows = client.list_documents("gauges")
    assert rows == [{"name": "Sede", "id": "abc"}, {"name": "Norte", "id": "def"}]
    assert session.calls[0]["url"] == f"{DOCS}/gauges"
    assert session.calls[0]["params"]["key"] == "k123"
    assert session.calls[1]["params"]["pageToken"] == "p2"


def test_empty_collection():
    client, _ = client_with(make_response(body={}))
    assert client.list_documents("gauges") == []


def test_run_query_orders_by_date_descending():
    client, session = client_with(make_response(body=[
        {"document": doc("records", "r2", gaugeId={"stringValue": "g1"}, amount={"doubleValue": 3}, date={"stringValue": "2024-02-01"})},
        {"readTime": "2024-02-02T00:00:00Z"},
    ]))
    rows = client.run_query("records", order_by="date")
    assert rows == [{"gaugeId": "g1", "amount": 3.0, "date": "2024-02-01", "id": "r2"}]
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == f"{DOCS}:runQuery"
    assert call["json"]["structuredQuery"]["orderBy"][0] == {
        "field": {"fieldPath": "date"},
        "direction": "DESCENDING",
    }


def test_http_errors_become_store_errors():
    client, _ = client_with(make_response(403, {"error": {"status": "PERMISSION_DENIED"}}))
    with pytest.raises(StoreError) as exc:
        client.list_documents("gauges")
    assert exc.value.status_code == 403
    assert "HTTP 403" in str(exc.value)


def test_connection_errors_become_store_errors():
    client, _ = client_with(requests.ConnectionError("offline"))
    with pytest.raises(StoreError, match="offline"):
        client.probe()


def test_remote_gauge_store_sends_fields_without_id():
    client, session = client_with(
        make_response(body=doc("gauges", "server-id")),
        make_response(body={}),
    )
    store = RemoteGaugeStore(client)
    assert store.live_updates

    store.create_gauge(Gauge(id="local-id", name="Sede", latitude=-23.5, longitude=-48.25))
    sent = session.calls[0]["json"]["fields"]
    assert "id" not in sent
    assert sent["name"] == {"stringValue": "Sede"}
    assert sent["latitude"] == {"doubleValue": -23.5}

    store.delete_gauge("server-id")
    assert session.calls[1]["method"] == "DELETE"
    assert session.calls[1]["url"] == f"{DOCS}/gauges/server-id"


def test_remote_listings_decode_and_skip_bad_documents():
    client, _ = client_with(
        make_response(body={"documents": [
            doc("gauges", "g1", name={"stringValue": "Sede"}, latitude={"doubleValue": 1}, longitude={"doubleValue": 2}),
            doc("gauges", "g2", name={"stringValue": "Sem GPS"}, latitude={"stringValue": ""}),
            doc("gauges", "g3"),  # no name
        ]}),
        make_response(body=[
            {"document": doc("records", "r1", gaugeId={"stringValue": "g1"}, amount={"integerValue": "4"}, date={"stringValue": "2024-02-01"})},
            {"document": doc("records", "r2", gaugeId={"stringValue": "g1"}, amount={"doubleValue": 1}, date={"stringValue": "??"})},
        ]),
    )
    gauges = RemoteGaugeStore(client).list_gauges()
    assert [(g.id, g.has_coordinates) for g in gauges] == [("g1", True), ("g2", False)]

    records = RemoteRecordStore(client).list_records()
    assert records == [RainfallRecord(id="r1", gauge_id="g1", amount=4, date=date(2024, 2, 1))]


def test_remote_record_store_create():
    client, session = client_with(make_response(body=doc("records", "new")))
    RemoteRecordStore(client).create_record(RainfallRecord(id="x", gauge_id="g1", amount=2.5, date=date(2024, 3, 1)))
    assert session.calls[0]["url"] == f"{DOCS}/records"
    assert session.calls[0]["json"]["fields"] == {
        "gaugeId": {"stringValue": "g1"},
        "amount": {"doubleValue": 2.5},
        "date": {"stringValue": "2024-03-01"},
    }


# ---------- backend selection ----------
def test_no_project_means_local(db_url):
    backend = open_backend(project_id="", db_url=db_url)
    assert backend.is_local
    assert backend.notice == NOTICE_NOT_CONFIGURED


def test_unreachable_project_falls_back_once_at_startup(db_url):
    client, _ = client_with(make_response(401, {"error": "bad key"}))
    backend = open_backend(client=client, db_url=db_url)
    assert backend.is_local
    assert "HTTP 401" in backend.notice


def test_reachable_project_is_remote(db_url):
    client, session = client_with(make_response(body={}))
    backend = open_backend(client=client, db_url=db_url)
    assert backend.mode == "remote"
    assert backend.notice is None
    assert isinstance(backend.gauges, RemoteGaugeStore)
    assert session.calls[0]["params"]["pageSize"] == 1
