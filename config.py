"""
Constants and configuration for TrendCast.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict, List, Optional

from pydantic_settings import BaseSettings

from engine.enums import Dispersion, Tendency


TRENDCAST_DATABASE_URL: str = os.getenv("TRENDCAST_DATABASE_URL", "sqlite:///trendcast.db")
TRENDCAST_FEED_URL: str = os.getenv("TRENDCAST_FEED_URL", "").strip()
TRENDCAST_FEED_PATH: str = os.getenv("TRENDCAST_FEED_PATH", "").strip()
TRENDCAST_FEED_TIMEOUT = int(os.getenv("TRENDCAST_FEED_TIMEOUT", "30"))
TRENDCAST_EXPORT_PATH: str = os.getenv("TRENDCAST_EXPORT_PATH", "trendcast_export.sql")

DEFAULT_INSTRUMENT = "BTC"
DEFAULT_PARAMETER = "close"

# key of the daily block inside a feed document
FEED_SERIES_KEY = "Time Series (Daily)"

# feed field name -> stored parameter name
FEED_FIELDS: Dict[str, str] = {
    "1. open": "open",
    "2. high": "high",
    "3. low": "low",
    "4. close": "close",
    "5. volume": "volume",
}

# parameter display order used by listings
PARAMETER_ORDER: List[str] = ["open", "high", "low", "close", "volume"]


class Settings(BaseSettings):
    database_url: str = TRENDCAST_DATABASE_URL

    # probability division is rounded half-up to this many fractional digits
    probability_places: int = 10
    # significant digits for tendency/dispersion divisions
    decimal_precision: int = 34

    default_tendency: Tendency = Tendency.mean_least_difference
    default_dispersion: Dispersion = Dispersion.mean_absolute_deviation
    default_instrument: str = DEFAULT_INSTRUMENT
    default_parameter: str = DEFAULT_PARAMETER
    min_series_length: int = 2

    feed_url: Optional[str] = TRENDCAST_FEED_URL or None
    # local feed file read by imports when no document is posted
    feed_path: Optional[str] = TRENDCAST_FEED_PATH or None
    feed_timeout: int = TRENDCAST_FEED_TIMEOUT
    feed_retry_attempts: int = 3
    feed_retry_delay: float = 1.0
    feed_retry_backoff: float = 2.0

    export_path: str = TRENDCAST_EXPORT_PATH

    api_host: str = "0.0.0.0"
    api_port: int = 4322

    model_config = {
        "env_prefix": "TRENDCAST_",
        "extra": "ignore",
    }


settings = Settings()
