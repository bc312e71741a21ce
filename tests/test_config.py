import pytest
from pydantic import ValidationError

from config import Settings
from engine.enums import Dispersion, Tendency


def test_defaults_are_typed_enums():
    cfg = Settings()
    assert cfg.default_tendency is Tendency.mean_least_difference
    assert cfg.default_dispersion is Dispersion.mean_absolute_deviation


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("TRENDCAST_DEFAULT_TENDENCY", "median")
    monkeypatch.setenv("TRENDCAST_DEFAULT_DISPERSION", "standard_deviation")
    monkeypatch.setenv("TRENDCAST_FEED_PATH", "/srv/feeds/daily.json")
    cfg = Settings()
    assert cfg.default_tendency is Tendency.median
    assert cfg.default_dispersion is Dispersion.standard_deviation
    assert cfg.feed_path == "/srv/feeds/daily.json"


@pytest.mark.parametrize("name", ["TRENDCAST_DEFAULT_TENDENCY", "TRENDCAST_DEFAULT_DISPERSION"])
def test_unknown_algorithm_rejected_at_startup(monkeypatch, name):
    monkeypatch.setenv(name, "bogus")
    with pytest.raises(ValidationError):
        Settings()
