# agrorain/stores/factory.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .. import config
from ..db import init_db, make_engine, make_session_factory
from ..errors import StoreError
from .base import GaugeStore, RecordStore
from .firestore import FirestoreClient
from .local import LocalGaugeStore, LocalRecordStore
from .remote import RemoteGaugeStore, RemoteRecordStore

log = logging.getLogger(__name__)

REMOTE = "remote"
LOCAL = "local"

NOTICE_NOT_CONFIGURED = (
    "O Firestore não está configurado. Os dados estão sendo salvos apenas neste computador."
)
NOTICE_UNREACHABLE = (
    "Não foi possível conectar ao Firestore na inicialização ({error}). "
    "Os dados estão sendo salvos apenas neste computador."
)


@dataclass
class Backend:
    """The stores picked for this process. Chosen once, never switched."""

    mode: str
    gauges: GaugeStore
    records: RecordStore
    notice: Optional[str] = None

    @property
    def is_local(self) -> bool:
        return self.mode == LOCAL


def open_local_backend(db_url: Optional[str] = None, notice: Optional[str] = None) -> Backend:
    engine = make_engine(db_url)
    init_db(engine)
    factory = make_session_factory(engine)
    return Backend(LOCAL, LocalGaugeStore(factory), LocalRecordStore(factory), notice)


def open_remote_backend(client: FirestoreClient) -> Backend:
    return Backend(REMOTE, RemoteGaugeStore(client), RemoteRecordStore(client))


def open_backend(
    *,
    project_id: Optional[str] = None,
    api_key: Optional[str] = None,
    db_url: Optional[str] = None,
    client: Optional[FirestoreClient] = None,
) -> Backend:
    """Startup selection: Firestore when configured and reachable, else local.

    A failed probe here falls back once; later connection problems are only
    reported, the backend stays what was chosen here.
    """
    project_id = config.FIRESTORE_PROJECT_ID if project_id is None else project_id
    if not project_id and client is None:
        log.info("no Firestore project configured, using local storage")
        return open_local_backend(db_url, notice=NOTICE_NOT_CONFIGURED)

    if client is None:
        client = FirestoreClient(project_id, config.FIRESTORE_API_KEY if api_key is None else api_key)
    try:
        client.probe()
    except StoreError as exc:
        log.warning("Firestore unreachable at startup (%s), using local storage", exc)
        return open_local_backend(db_url, notice=NOTICE_UNREACHABLE.format(error=exc))

    log.info("using Firestore project %s", client.project_id)
    return open_remote_backend(client)
