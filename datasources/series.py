"""
Database-backed price series source: query-by-date, query-by-range, availability
listings, store status and upserts of imported observations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, select

from config import PARAMETER_ORDER
from database import get_db_session, table_exists
from datasources.base import SeriesPoint, SeriesSource
from db_models import PriceObservation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observation:
    instrument: str
    parameter: str
    observed_on: date
    value: Decimal


@dataclass(frozen=True)
class StoreStatus:
    table_exists: bool
    row_count: int
    instruments: List[str]

    @property
    def healthy(self) -> bool:
        return self.table_exists and self.row_count > 0


def _key(instrument: str, parameter: Optional[str] = None) -> Tuple[str, Optional[str]]:
    return instrument.strip().upper(), parameter.strip().lower() if parameter is not None else None


def _parameter_rank(name: str) -> Tuple[int, str]:
    return (PARAMETER_ORDER.index(name) if name in PARAMETER_ORDER else len(PARAMETER_ORDER), name)


class DatabaseSeriesSource(SeriesSource):
    def points(
        self,
        instrument: str,
        parameter: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[SeriesPoint]:
        inst, param = _key(instrument, parameter)
        stmt = select(PriceObservation.observed_on, PriceObservation.value).where(
            PriceObservation.instrument == inst,
            PriceObservation.parameter == param,
        )
        if start is not None:
            stmt = stmt.where(PriceObservation.observed_on >= start)
        if end is not None:
            stmt = stmt.where(PriceObservation.observed_on <= end)
        stmt = stmt.order_by(PriceObservation.observed_on.asc())
        with get_db_session() as session:
            return [SeriesPoint(observed_on=d, value=Decimal(v)) for d, v in session.execute(stmt)]

    def value_on(self, instrument: str, parameter: str, observed_on: date) -> Optional[Decimal]:
        inst, param = _key(instrument, parameter)
        stmt = select(PriceObservation.value).where(
            PriceObservation.instrument == inst,
            PriceObservation.parameter == param,
            PriceObservation.observed_on == observed_on,
        )
        with get_db_session() as session:
            raw = session.execute(stmt).scalar_one_or_none()
        return Decimal(raw) if raw is not None else None

    def day(self, instrument: str, observed_on: date) -> Dict[str, Decimal]:
        inst, _ = _key(instrument)
        stmt = select(PriceObservation.parameter, PriceObservation.value).where(
            PriceObservation.instrument == inst,
            PriceObservation.observed_on == observed_on,
        )
        with get_db_session() as session:
            rows = list(session.execute(stmt))
        return {name: Decimal(v) for name, v in sorted(rows, key=lambda r: _parameter_rank(r[0]))}

    def available_dates(self, instrument: str) -> List[date]:
        inst, _ = _key(instrument)
        stmt = (
            select(PriceObservation.observed_on)
            .where(PriceObservation.instrument == inst)
            .distinct()
            .order_by(PriceObservation.observed_on.asc())
        )
        with get_db_session() as session:
            return list(session.execute(stmt).scalars())

    def available_parameters(self, instrument: str) -> List[str]:
        inst, _ = _key(instrument)
        stmt = select(PriceObservation.parameter).where(PriceObservation.instrument == inst).distinct()
        with get_db_session() as session:
            names = list(session.execute(stmt).scalars())
        return sorted(names, key=_parameter_rank)

    def instruments(self) -> List[str]:
        stmt = select(PriceObservation.instrument).distinct().order_by(PriceObservation.instrument)
        with get_db_session() as session:
            return list(session.execute(stmt).scalars())

    def status(self) -> StoreStatus:
        if not table_exists(PriceObservation.__tablename__):
            return StoreStatus(table_exists=False, row_count=0, instruments=[])
        with get_db_session() as session:
            count = session.execute(select(func.count()).select_from(PriceObservation)).scalar_one()
        return StoreStatus(table_exists=True, row_count=int(count), instruments=self.instruments())

    def upsert(self, observations: Iterable[Observation]) -> Tuple[int, int]:
        batch = [(_key(o.instrument, o.parameter), o.observed_on, str(o.value)) for o in observations]
        if not batch:
            return 0, 0
        instruments = {inst for (inst, _), _, _ in batch}
        dates = [d for _, d, _ in batch]

        inserted = updated = 0
        with get_db_session() as session:
            # one query for every stored row the batch could touch
            existing = session.execute(
                select(PriceObservation).where(
                    PriceObservation.instrument.in_(instruments),
                    PriceObservation.observed_on.between(min(dates), max(dates)),
                )
            ).scalars()
            rows: Dict[Tuple[str, str, date], PriceObservation] = {
                (r.instrument, r.parameter, r.observed_on): r for r in existing
            }
            for (inst, param), observed_on, value in batch:
                row = rows.get((inst, param, observed_on))
                if row is None:
                    row = PriceObservation(instrument=inst, parameter=param, observed_on=observed_on, value=value)
                    session.add(row)
                    rows[(inst, param, observed_on)] = row
                    inserted += 1
                elif row.value != value:
                    row.value = value
                    updated += 1
        log.info("upserted observations: %d inserted, %d updated", inserted, updated)
        return inserted, updated
