"""
Import of daily feed documents ("Time Series (Daily)" JSON) into the observation store,
from a local file or fetched over HTTP.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import FEED_FIELDS, FEED_SERIES_KEY, settings
from datasources.exceptions import FeedFormatError
from datasources.helpers import fetch_json
from datasources.retry import retry
from datasources.series import DatabaseSeriesSource, Observation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSummary:
    instrument: str
    dates: int
    inserted: int
    updated: int
    skipped: int


def parse_feed(document: Dict[str, Any], instrument: str) -> tuple[List[Observation], int]:
    """Observations in ``document`` plus the count of fields that could not be parsed."""
    if not isinstance(document, dict) or FEED_SERIES_KEY not in document:
        raise FeedFormatError(f"feed document has no {FEED_SERIES_KEY!r} key")
    block = document[FEED_SERIES_KEY]
    if not isinstance(block, dict):
        raise FeedFormatError(f"{FEED_SERIES_KEY!r} must map dates to daily values")

    observations: List[Observation] = []
    skipped = 0
    for raw_date, fields in block.items():
        try:
            observed_on = date.fromisoformat(raw_date)
        except (TypeError, ValueError) as exc:
            raise FeedFormatError(f"invalid date in feed: {raw_date!r}") from exc
        if not isinstance(fields, dict):
            skipped += len(FEED_FIELDS)
            continue
        for key, parameter in FEED_FIELDS.items():
            raw = fields.get(key)
            try:
                value = Decimal(str(raw).strip())
            except (InvalidOperation, ValueError):
                value = None
            if raw is None or value is None or not value.is_finite():
                log.debug("skipping %s for %s: %r", parameter, raw_date, raw)
                skipped += 1
                continue
            observations.append(Observation(instrument, parameter, observed_on, value))
    return observations, skipped


def load_feed_file(path: Union[str, Path]) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise FeedFormatError(f"feed file {path} is not valid JSON: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FeedFormatError(f"feed file {path} is not UTF-8 text") from exc
    except OSError as exc:
        raise FeedFormatError(f"cannot read feed file {path}: {exc.strerror or exc}") from exc


@retry()
async def fetch_feed(url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return await fetch_json(url, params=params, timeout=settings.feed_timeout)


def import_feed(source: DatabaseSeriesSource, document: Dict[str, Any], instrument: str) -> ImportSummary:
    instrument = instrument.strip().upper()
    observations, skipped = parse_feed(document, instrument)
    inserted, updated = source.upsert(observations)
    dates = len({o.observed_on for o in observations})
    log.info(
        "imported %s feed: %d dates, %d inserted, %d updated, %d skipped",
        instrument, dates, inserted, updated, skipped,
    )
    return ImportSummary(instrument=instrument, dates=dates, inserted=inserted, updated=updated, skipped=skipped)
