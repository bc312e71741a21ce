from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from engine.enums import Dispersion, Tendency


class ForecastRequest(BaseModel):
    instrument: Optional[str] = None
    parameter: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None
    # explicit series; when given the store is not consulted
    values: Optional[List[Decimal]] = None
    bias: int = 0
    tendency: Optional[Tendency] = None
    dispersion: Optional[Dispersion] = None
    anchor: Optional[Decimal] = None


class ImportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    instrument: str = Field(default="BTC", min_length=1, max_length=32)
    # inline feed document; when absent the configured feed URL is fetched
    document: Optional[Dict[str, Any]] = None
    params: Dict[str, Any] = Field(default_factory=dict)


class ExportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    instrument: Optional[str] = None
