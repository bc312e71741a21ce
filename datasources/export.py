"""
Export of the observation table to a plain SQL dump file.

The dump is written to a temporary file beside the target and moved into place
only once every row has been rendered, so a failed export leaves any previous
dump untouched.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from sqlalchemy import Table, insert, select
from sqlalchemy.engine import Dialect
from sqlalchemy.schema import CreateTable

from database import get_db_session, get_engine
from db_models import PriceObservation

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportSummary:
    path: str
    rows: int


def _insert_sql(table: Table, row: Mapping[str, Any], dialect: Dialect) -> str:
    stmt = insert(table).values(**dict(row))
    return str(stmt.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))


def export_sql(path: Union[str, Path], instrument: Optional[str] = None) -> ExportSummary:
    table = PriceObservation.__table__
    dialect = get_engine().dialect

    stmt = select(table).order_by(table.c.instrument, table.c.parameter, table.c.observed_on)
    if instrument:
        stmt = stmt.where(table.c.instrument == instrument.strip().upper())

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    rows = 0
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as out, get_db_session() as session:
            out.write(f"-- {table.name} export\n")
            out.write(str(CreateTable(table).compile(dialect=dialect)).strip() + ";\n\n")
            for row in session.execute(stmt).mappings():
                out.write(_insert_sql(table, row, dialect) + ";\n")
                rows += 1
        os.replace(tmp_name, target)
    except Exception:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    log.info("exported %d row(s) of %s to %s", rows, table.name, target)
    return ExportSummary(path=str(target), rows=rows)
