"""
Shared utilities and dependencies for API route modules.

Provides the series source shared by the routers so individual route files
stay thin and tests can swap the source in one place.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional

from datasources.series import DatabaseSeriesSource

_source: Optional[DatabaseSeriesSource] = None


def get_source() -> DatabaseSeriesSource:
    global _source
    if _source is None:
        _source = DatabaseSeriesSource()
    return _source


def reset_source() -> None:
    global _source
    _source = None
