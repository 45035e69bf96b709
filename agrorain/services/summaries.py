# agrorain/services/summaries.py
from __future__ import annotations
from typing import Dict, List, Sequence, Tuple

from .. import config
from ..schemas import Gauge, GaugeSummary, RainfallRecord


def build_gauge_summaries(
    gauges: Sequence[Gauge],
    records: Sequence[RainfallRecord],
) -> List[GaugeSummary]:
    """One summary per gauge that can be placed on a map.

    Gauges without usable coordinates are skipped here only; records that
    point at unknown gauges are ignored.
    """
    by_gauge: Dict[str, List[RainfallRecord]] = {}
    for r in records:
        by_gauge.setdefault(r.gauge_id, []).append(r)

    summaries: List[GaugeSummary] = []
    for g in gauges:
        if not g.has_coordinates:
            continue
        own = by_gauge.get(g.id, [])
        total = sum(r.amount for r in own)
        # stable sort: among equal dates the first one in input order wins
        latest = sorted(own, key=lambda r: r.date, reverse=True)[0] if own else None
        summaries.append(
            GaugeSummary(
                **g.model_dump(),
                total=total,
                last_amount=latest.amount if latest else 0.0,
                last_date=latest.date if latest else None,
            )
        )
    return summaries


def map_center(summaries: Sequence[GaugeSummary]) -> Tuple[float, float]:
    for s in summaries:
        if s.has_coordinates:
            return (s.latitude, s.longitude)  # type: ignore[return-value]
    return config.DEFAULT_CENTER
