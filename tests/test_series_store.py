from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import event

from config import settings
from database import get_engine
from datasources.feed import parse_feed
from datasources.exceptions import SeriesNotFound
from datasources.series import DatabaseSeriesSource, Observation


def _seed(source, instrument="BTC"):
    return source.upsert([
        Observation(instrument, "close", date(2025, 3, 19), Decimal("83000.00")),
        Observation(instrument, "close", date(2025, 3, 20), Decimal("84500.50")),
        Observation(instrument, "close", date(2025, 3, 21), Decimal("84250.25")),
        Observation(instrument, "volume", date(2025, 3, 21), Decimal("1520.75")),
        Observation(instrument, "open", date(2025, 3, 21), Decimal("84100.10")),
    ])


def test_upsert_inserts_then_updates(db):
    source = DatabaseSeriesSource()
    assert _seed(source) == (5, 0)
    assert _seed(source) == (0, 0)
    inserted, updated = source.upsert([
        Observation("btc", "CLOSE", date(2025, 3, 21), Decimal("84300")),
        Observation("BTC", "close", date(2025, 3, 22), Decimal("85000")),
    ])
    assert (inserted, updated) == (1, 1)
    assert source.value_on("BTC", "close", date(2025, 3, 21)) == Decimal("84300")


def test_values_keep_their_exact_digits(db):
    source = DatabaseSeriesSource()
    _seed(source)
    value = source.value_on("btc", "close", date(2025, 3, 19))
    assert value == Decimal("83000.00")
    assert str(value) == "83000.00"


def test_points_are_ascending_and_range_inclusive(db):
    source = DatabaseSeriesSource()
    _seed(source)
    points = source.points("BTC", "close")
    assert [p.observed_on for p in points] == [date(2025, 3, 19), date(2025, 3, 20), date(2025, 3, 21)]
    ranged = source.points("BTC", "close", start=date(2025, 3, 20), end=date(2025, 3, 21))
    assert [p.value for p in ranged] == [Decimal("84500.50"), Decimal("84250.25")]


def test_missing_value_is_none(db):
    source = DatabaseSeriesSource()
    _seed(source)
    assert source.value_on("BTC", "high", date(2025, 3, 21)) is None
    assert source.value_on("ETH", "close", date(2025, 3, 21)) is None


def test_day_and_availability_listings(db):
    source = DatabaseSeriesSource()
    _seed(source)
    day = source.day("BTC", date(2025, 3, 21))
    assert list(day) == ["open", "close", "volume"]
    assert source.available_parameters("BTC") == ["open", "close", "volume"]
    assert source.available_dates("btc") == [date(2025, 3, 19), date(2025, 3, 20), date(2025, 3, 21)]
    assert source.day("BTC", date(2020, 1, 1)) == {}


def test_status_reports_rows_and_instruments(db):
    source = DatabaseSeriesSource()
    status = source.status()
    assert status.table_exists is True
    assert status.row_count == 0
    assert status.healthy is False
    _seed(source)
    _seed(source, "ETH")
    status = source.status()
    assert status.row_count == 10
    assert status.instruments == ["BTC", "ETH"]
    assert status.healthy is True


def test_get_series_requires_two_points(db):
    source = DatabaseSeriesSource()
    _seed(source)
    assert source.get_series("BTC", "close") == (Decimal("83000.00"), Decimal("84500.50"), Decimal("84250.25"))
    with pytest.raises(SeriesNotFound):
        source.get_series("BTC", "volume")
    with pytest.raises(SeriesNotFound):
        source.get_series("BTC", "close", start=date(2025, 3, 21))


def test_get_series_minimum_follows_settings(db, monkeypatch):
    source = DatabaseSeriesSource()
    _seed(source)
    monkeypatch.setattr(settings, "min_series_length", 4)
    with pytest.raises(SeriesNotFound):
        source.get_series("BTC", "close")


def test_upsert_reads_existing_rows_once(db, feed):
    source = DatabaseSeriesSource()
    _seed(source)
    selects = []

    def count_selects(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            selects.append(statement)

    engine = get_engine()
    event.listen(engine, "before_cursor_execute", count_selects)
    try:
        observations, _ = parse_feed(feed, "BTC")
        inserted, updated = source.upsert(observations)
    finally:
        event.remove(engine, "before_cursor_execute", count_selects)
    # the seeded rows carry the same values as the feed
    assert (inserted, updated) == (9, 0)
    assert len(selects) == 1


def test_upsert_repeated_key_in_one_batch(db):
    source = DatabaseSeriesSource()
    inserted, updated = source.upsert([
        Observation("BTC", "close", date(2025, 3, 21), Decimal("1")),
        Observation("BTC", "close", date(2025, 3, 21), Decimal("2")),
    ])
    assert (inserted, updated) == (1, 1)
    assert source.value_on("BTC", "close", date(2025, 3, 21)) == Decimal("2")
    assert source.upsert([]) == (0, 0)
