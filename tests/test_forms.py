from datetime import date

import pytest

from agrorain.errors import FormError
from agrorain.forms import gauge_from_form, record_from_form


def test_gauge_from_form():
    g = gauge_from_form("  Talhão 04 Sul ", "-23.12345", "-48,6789", "")
    assert g.name == "Talhão 04 Sul"
    assert g.latitude == -23.12345
    assert g.longitude == -48.6789
    assert g.description is None
    assert g.id


def test_gauge_ids_are_unique():
    a = gauge_from_form("A", "1", "2")
    b = gauge_from_form("A", "1", "2")
    assert a.id != b.id


@pytest.mark.parametrize(
    "name, lat, lng, field",
    [
        ("", "1", "2", "name"),
        ("A", "", "2", "latitude"),
        ("A", "1", None, "longitude"),
        ("A", "norte", "2", "latitude"),
        ("A", "nan", "2", "latitude"),
    ],
)
def test_gauge_form_refuses_missing_or_unparseable(name, lat, lng, field):
    with pytest.raises(FormError) as exc:
        gauge_from_form(name, lat, lng)
    assert field in exc.value.fields


def test_record_from_form():
    r = record_from_form("g1", 12.5, date(2024, 3, 1))
    assert (r.gauge_id, r.amount, r.date) == ("g1", 12.5, date(2024, 3, 1))
    assert record_from_form("g1", "0,5", "2024-03-01").amount == 0.5


@pytest.mark.parametrize(
    "gauge_id, amount, day",
    [
        (None, 1, date(2024, 3, 1)),
        ("", 1, date(2024, 3, 1)),
        ("g1", None, date(2024, 3, 1)),
        ("g1", "muito", date(2024, 3, 1)),
        ("g1", 1, None),
        ("g1", 1, "ontem"),
    ],
)
def test_record_form_refuses_missing_or_unparseable(gauge_id, amount, day):
    with pytest.raises(FormError):
        record_from_form(gauge_id, amount, day)
