import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from api.routes.common import reset_source
from database import dispose_database, init_database, init_db


REFERENCE_SERIES = ["1.0", "2.0", "1.5", "1.0", "1.5", "2.0", "2.5", "3.0", "3.5", "4.0", "4.5"]


def feed_document():
    return {
        "Meta Data": {"2. Symbol": "BTC", "3. Last Refreshed": "2025-03-21"},
        "Time Series (Daily)": {
            "2025-03-21": {
                "1. open": "84100.10",
                "2. high": "84800.00",
                "3. low": "83900.00",
                "4. close": "84250.25",
                "5. volume": "1520.75",
            },
            "2025-03-20": {
                "1. open": "83200.00",
                "2. high": "84700.00",
                "3. low": "83100.00",
                "4. close": "84500.50",
                "5. volume": "1710.10",
            },
            "2025-03-19": {
                "1. open": "82900.00",
                "2. high": "83400.00",
                "3. low": "82500.00",
                "4. close": "83000.00",
                "5. volume": "n/a",
            },
        },
    }


@pytest.fixture
def reference_series():
    return list(REFERENCE_SERIES)


@pytest.fixture
def feed():
    return feed_document()


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite store per test; the module-level engine is torn down afterwards."""
    dispose_database()
    reset_source()
    init_database(f"sqlite:///{tmp_path / 'trendcast.db'}")
    init_db()
    yield tmp_path
    reset_source()
    dispose_database()
