"""
Test Suite for API Routes - Series

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import json
import threading
from datetime import date
from decimal import Decimal

import pytest
from fastapi import HTTPException
from pydantic import ValidationError

from api.requests import ExportRequest, ImportRequest
from api.routes import health as health_route
from api.routes import series as series_route
from api.routes.common import get_source
from config import settings
from datasources.exceptions import QueryTimeout


@pytest.fixture
def no_feed(monkeypatch):
    monkeypatch.setattr(settings, "feed_path", None)
    monkeypatch.setattr(settings, "feed_url", None)


@pytest.mark.asyncio
async def test_import_document_then_query(db, feed):
    resp = await series_route.import_series(ImportRequest(instrument="btc", document=feed))
    assert (resp.instrument, resp.dates, resp.inserted, resp.skipped) == ("BTC", 3, 14, 1)

    params = await series_route.list_parameters("BTC")
    assert params == {"parameters": ["open", "high", "low", "close", "volume"]}
    dates = await series_route.list_dates("btc")
    assert dates == {"dates": ["2025-03-19", "2025-03-20", "2025-03-21"]}

    value = await series_route.value_on("BTC", "close", date(2025, 3, 20))
    assert value.value == Decimal("84500.50")
    assert value.model_dump()["value"] == "84500.5"

    day = await series_route.day_values("BTC", date(2025, 3, 19))
    assert list(day.values) == ["open", "high", "low", "close"]

    ranged = await series_route.series_range("BTC", "close", start=date(2025, 3, 20), end=None)
    assert ranged.count == 2
    assert [p.observed_on for p in ranged.points] == [date(2025, 3, 20), date(2025, 3, 21)]


@pytest.mark.asyncio
async def test_import_from_configured_feed_path(db, feed, no_feed, monkeypatch):
    path = db / "feed.json"
    path.write_text(json.dumps(feed), encoding="utf-8")
    monkeypatch.setattr(settings, "feed_path", str(path))
    resp = await series_route.import_series(ImportRequest())
    assert resp.instrument == "BTC"
    assert resp.inserted == 14


@pytest.mark.asyncio
async def test_unreadable_feed_path_is_422(db, no_feed, monkeypatch):
    monkeypatch.setattr(settings, "feed_path", str(db / "missing" / "feed.json"))
    with pytest.raises(HTTPException) as exc:
        await series_route.import_series(ImportRequest())
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_import_from_configured_feed_url(db, feed, no_feed, monkeypatch):
    seen = {}

    async def fake_fetch_feed(url, params=None):
        seen["url"], seen["params"] = url, params
        return feed

    monkeypatch.setattr(settings, "feed_url", "http://feed.local/query")
    monkeypatch.setattr(series_route, "fetch_feed", fake_fetch_feed)
    resp = await series_route.import_series(ImportRequest(params={"symbol": "BTC"}))
    assert resp.inserted == 14
    assert seen == {"url": "http://feed.local/query", "params": {"symbol": "BTC"}}


def test_requests_do_not_accept_server_paths_or_urls():
    with pytest.raises(ValidationError):
        ImportRequest(path="/etc/passwd")
    with pytest.raises(ValidationError):
        ImportRequest(url="http://169.254.169.254/latest/meta-data")
    with pytest.raises(ValidationError):
        ExportRequest(path="/tmp/anywhere/owned.sql")


@pytest.mark.asyncio
async def test_import_without_any_source_is_400(db, no_feed):
    with pytest.raises(HTTPException) as exc:
        await series_route.import_series(ImportRequest())
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_import_malformed_document_is_422(db):
    with pytest.raises(HTTPException) as exc:
        await series_route.import_series(ImportRequest(document={"rows": []}))
    assert exc.value.status_code == 422


@pytest.mark.asyncio
async def test_import_feed_timeout_is_504(db, no_feed, monkeypatch):
    async def slow_feed(url, params=None):
        raise QueryTimeout("feed request timed out")

    monkeypatch.setattr(settings, "feed_url", "http://feed.local")
    monkeypatch.setattr(series_route, "fetch_feed", slow_feed)
    with pytest.raises(HTTPException) as exc:
        await series_route.import_series(ImportRequest())
    assert exc.value.status_code == 504


@pytest.mark.asyncio
async def test_missing_values_are_404(db, feed):
    await series_route.import_series(ImportRequest(document=feed))
    with pytest.raises(HTTPException) as exc:
        await series_route.value_on("BTC", "close", date(2024, 1, 1))
    assert exc.value.status_code == 404
    with pytest.raises(HTTPException) as exc:
        await series_route.day_values("ETH", date(2025, 3, 21))
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_export_writes_to_configured_path(db, feed, monkeypatch):
    await series_route.import_series(ImportRequest(document=feed))
    target = db / "exports" / "dump.sql"
    monkeypatch.setattr(settings, "export_path", str(target))
    resp = await series_route.export_series(ExportRequest(instrument="btc"))
    assert resp.rows == 14
    assert resp.path == str(target)
    assert target.exists()


@pytest.mark.asyncio
async def test_store_queries_run_off_the_event_loop_thread(db, feed, monkeypatch):
    await series_route.import_series(ImportRequest(document=feed))
    source = get_source()
    loop_thread = threading.get_ident()
    seen = []
    original = source.points

    def recording_points(*args, **kwargs):
        seen.append(threading.get_ident())
        return original(*args, **kwargs)

    monkeypatch.setattr(source, "points", recording_points)
    ranged = await series_route.series_range("BTC", "close", start=None, end=None)
    assert ranged.count == 3
    assert seen and all(ident != loop_thread for ident in seen)


@pytest.mark.asyncio
async def test_health_reports_store_contents(db, feed):
    empty = await health_route.health()
    assert (empty.status, empty.row_count) == ("empty", 0)
    await series_route.import_series(ImportRequest(document=feed))
    ok = await health_route.health()
    assert ok.status == "ok"
    assert ok.row_count == 14
    assert ok.instruments == ["BTC"]
