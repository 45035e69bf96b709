# agrorain/actions.py
from __future__ import annotations
import logging
from typing import Optional, Tuple

from .errors import StoreError
from .schemas import Gauge, RainfallRecord
from .state import (
    AppState,
    connection_failed,
    connection_restored,
    gauge_added,
    gauge_removed,
    gauges_loaded,
    record_added,
    records_loaded,
)
from .stores import Backend, Subscription

log = logging.getLogger(__name__)


def initial_state(backend: Backend) -> AppState:
    return AppState(mode=backend.mode, notice=backend.notice)


# --------------------------------------------------------------------
# Writes. StoreError propagates to the caller, who reports it once.
# Live backends are not echoed into state here: the next snapshot brings
# the change (there is nothing to roll back on failure).
# --------------------------------------------------------------------
def add_gauge(backend: Backend, state: AppState, gauge: Gauge) -> AppState:
    try:
        backend.gauges.create_gauge(gauge)
    except StoreError:
        log.exception("saving gauge %s failed", gauge.name)
        raise
    if backend.gauges.live_updates:
        return state
    return gauge_added(state, gauge)


def delete_gauge(backend: Backend, state: AppState, gauge_id: str) -> AppState:
    try:
        backend.gauges.delete_gauge(gauge_id)
    except StoreError:
        log.exception("deleting gauge %s failed", gauge_id)
        raise
    if backend.gauges.live_updates:
        return state
    return gauge_removed(state, gauge_id)


def add_record(backend: Backend, state: AppState, record: RainfallRecord) -> AppState:
    try:
        backend.records.create_record(record)
    except StoreError:
        log.exception("saving record for gauge %s failed", record.gauge_id)
        raise
    if backend.records.live_updates:
        return state
    return record_added(state, record)


# --------------------------------------------------------------------
# Live updates
# --------------------------------------------------------------------
def refresh(
    state: AppState,
    gauges_sub: Optional[Subscription[Gauge]],
    records_sub: Optional[Subscription[RainfallRecord]],
) -> Tuple[AppState, bool]:
    """Polls both subscriptions once; returns the new state and whether it changed."""
    new_state = state
    failed = False
    for sub, loaded in ((gauges_sub, gauges_loaded), (records_sub, records_loaded)):
        if sub is None:
            continue
        try:
            snapshot = sub.poll()
        except StoreError as exc:
            log.warning("%s update failed: %s", sub.name, exc)
            new_state = connection_failed(new_state, str(exc))
            failed = True
            continue
        if snapshot is not None:
            new_state = loaded(new_state, snapshot)
    if not failed:
        new_state = connection_restored(new_state)
    return new_state, new_state != state
