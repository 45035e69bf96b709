from agrorain.actions import add_gauge, add_record, initial_state, refresh
from agrorain.forms import gauge_from_form, record_from_form
from agrorain.services.kml import build_kml
from agrorain.services.stats import compute_dashboard_stats, last_30_days_series, local_today
from agrorain.services.summaries import build_gauge_summaries
from agrorain.stores import open_local_backend


def test_gauge_record_dashboard_and_map(local_backend):
    state = initial_state(local_backend)
    state, _ = refresh(state, local_backend.gauges.watch_gauges(), local_backend.records.watch_records())

    g1 = gauge_from_form("G1", "1", "2")
    state = add_gauge(local_backend, state, g1)
    today = local_today()
    state = add_record(local_backend, state, record_from_form(g1.id, "10", today))

    stats = compute_dashboard_stats(state.records, today=today)
    assert stats.weekly_total == 10
    assert stats.monthly_total == 10
    assert stats.season_total == 10
    assert stats.max_rainfall == 10
    assert last_30_days_series(state.records, today=today)[-1].amount == 10

    [summary] = build_gauge_summaries(state.gauges, state.records)
    assert summary.total == 10
    assert summary.last_amount == 10
    assert summary.last_date == today
    assert "<coordinates>2,1,0</coordinates>" in build_kml([summary])


def test_gauge_without_coordinates_is_selectable_but_not_mapped(db_url):
    backend = open_local_backend(db_url)
    backend.gauges.doc.write([
        {"id": "a", "name": "Com GPS", "latitude": -10, "longitude": -50},
        {"id": "b", "name": "Sem GPS", "latitude": "?", "longitude": None},
    ])
    state, _ = refresh(initial_state(backend), backend.gauges.watch_gauges(), backend.records.watch_records())

    assert state.gauge_names() == {"a": "Com GPS", "b": "Sem GPS"}
    assert [s.id for s in build_gauge_summaries(state.gauges, state.records)] == ["a"]
