# agrorain/stores/firestore.py
"""Minimal Firestore REST (v1) client for the ``gauges`` / ``records`` collections.

Only what the app needs: list, ordered query, create with server-assigned id,
delete. Documents come back as plain dicts with the document id under ``"id"``.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

import requests

from .. import config
from ..errors import StoreError

log = logging.getLogger(__name__)


def _json_or_raise(resp: requests.Response):
    try:
        resp.raise_for_status()
    except requests.HTTPError as e:
        text = resp.text[:500] if resp.text else ""
        raise StoreError(f"HTTP {resp.status_code}: {text or e}", status_code=resp.status_code) from e
    try:
        return resp.json()
    except ValueError as e:
        raise StoreError("Response was not JSON", status_code=resp.status_code) from e


# ---------- value codec ----------
def encode_value(value: Any) -> Dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    return {"stringValue": str(value)}


def encode_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: encode_value(v) for k, v in data.items()}


def decode_value(value: Dict[str, Any]) -> Any:
    if not value:
        return None
    kind, raw = next(iter(value.items()))
    if kind == "nullValue":
        return None
    if kind == "integerValue":
        return int(raw)
    if kind == "doubleValue":
        return float(raw)
    if kind == "mapValue":
        return decode_fields((raw or {}).get("fields", {}))
    if kind == "arrayValue":
        return [decode_value(v) for v in (raw or {}).get("values", [])]
    # stringValue, booleanValue, timestampValue, referenceValue, ...
    return raw


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: decode_value(v) for k, v in fields.items()}


def decode_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    # name = projects/<p>/databases/(default)/documents/<collection>/<id>
    data = decode_fields(doc.get("fields", {}))
    data["id"] = doc["name"].rsplit("/", 1)[-1]
    return data


# ---------- client ----------
class FirestoreClient:
    def __init__(
        self,
        project_id: str,
        api_key: str = "",
        *,
        base_url: str = config.FIRESTORE_BASE_URL,
        timeout: float = config.HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.project_id = project_id
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self.documents_url = f"{base_url.rstrip('/')}/projects/{project_id}/databases/(default)/documents"

    def _request(self, method: str, url: str, *, params: Optional[dict] = None, json: Any = None):
        params = dict(params or {})
        if self.api_key:
            params["key"] = self.api_key
        try:
            resp = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            raise StoreError(f"Connection to Firestore failed: {e}") from e
        return _json_or_raise(resp)

    def list_documents(self, collection: str, page_size: int = 300) -> List[Dict[str, Any]]:
        docs: List[Dict[str, Any]] = []
        params: Dict[str, Any] = {"pageSize": page_size}
        while True:
            body = self._request("GET", f"{self.documents_url}/{collection}", params=params) or {}
            docs.extend(decode_document(d) for d in body.get("documents", []))
            token = body.get("nextPageToken")
            if not token:
                return docs
            params = {"pageSize": page_size, "pageToken": token}

    def run_query(self, collection: str, *, order_by: str, descending: bool = True) -> List[Dict[str, Any]]:
        query = {
            "structuredQuery": {
                "from": [{"collectionId": collection}],
                "orderBy": [{
                    "field": {"fieldPath": order_by},
                    "direction": "DESCENDING" if descending else "ASCENDING",
                }],
            }
        }
        rows = self._request("POST", f"{self.documents_url}:runQuery", json=query) or []
        # rows without "document" only carry read metadata
        return [decode_document(r["document"]) for r in rows if r.get("document")]

    def create_document(self, collection: str, data: Dict[str, Any]) -> str:
        body = self._request("POST", f"{self.documents_url}/{collection}", json={"fields": encode_fields(data)})
        doc_id = body["name"].rsplit("/", 1)[-1]
        log.info("created %s/%s", collection, doc_id)
        return doc_id

    def delete_document(self, collection: str, doc_id: str) -> None:
        self._request("DELETE", f"{self.documents_url}/{collection}/{doc_id}")
        log.info("deleted %s/%s", collection, doc_id)

    def probe(self, collection: str = "gauges") -> None:
        """Raises StoreError when the project is not reachable with this key."""
        self._request("GET", f"{self.documents_url}/{collection}", params={"pageSize": 1})
