# agrorain/state.py
"""Application state and the pure functions that produce the next state.

Nothing in here talks to a store; see ``actions.py`` for the side effects.
"""
from __future__ import annotations
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .schemas import Gauge, RainfallRecord


class AppState(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: str = "local"
    notice: Optional[str] = None            # why we run locally, shown permanently
    connection_error: Optional[str] = None  # last failed live update, cleared by the next good one
    gauges: List[Gauge] = []
    records: List[RainfallRecord] = []

    def gauge_names(self) -> Dict[str, str]:
        return {g.id: g.name for g in self.gauges}


def _newest_first(records: Sequence[RainfallRecord]) -> List[RainfallRecord]:
    return sorted(records, key=lambda r: r.date, reverse=True)


# ---- snapshots (replace the whole collection) ----
def gauges_loaded(state: AppState, gauges: Sequence[Gauge]) -> AppState:
    return state.model_copy(update={"gauges": list(gauges)})


def records_loaded(state: AppState, records: Sequence[RainfallRecord]) -> AppState:
    return state.model_copy(update={"records": list(records)})


def connection_failed(state: AppState, message: str) -> AppState:
    return state.model_copy(update={"connection_error": message})


def connection_restored(state: AppState) -> AppState:
    if state.connection_error is None:
        return state
    return state.model_copy(update={"connection_error": None})


# ---- local writes ----
def gauge_added(state: AppState, gauge: Gauge) -> AppState:
    return state.model_copy(update={"gauges": [*state.gauges, gauge]})


def gauge_removed(state: AppState, gauge_id: str) -> AppState:
    return state.model_copy(update={"gauges": [g for g in state.gauges if g.id != gauge_id]})


def record_added(state: AppState, record: RainfallRecord) -> AppState:
    return state.model_copy(update={"records": _newest_first([record, *state.records])})
