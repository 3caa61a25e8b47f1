"""Environment-driven configuration helpers and option defaults."""

from __future__ import annotations

import pytest

from trail_itinerary import config
from trail_itinerary.models import ProcessingOptions


def test_env_float_and_int(monkeypatch) -> None:
    monkeypatch.setenv("TEST_TOLERANCE", "12.5")
    monkeypatch.setenv("TEST_WINDOW", "9")
    monkeypatch.setenv("TEST_BROKEN", "abc")
    assert config._env_float("TEST_TOLERANCE", 1.0) == 12.5
    assert config._env_int("TEST_WINDOW", 1) == 9
    assert config._env_float("TEST_BROKEN", 3.0) == 3.0
    assert config._env_int("TEST_BROKEN", 4) == 4
    monkeypatch.delenv("TEST_TOLERANCE")
    assert config._env_float("TEST_TOLERANCE", 1.0) == 1.0


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("YES", True), (" on ", True), ("false", False), ("0", False), ("maybe", None)],
)
def test_env_bool(monkeypatch, raw: str, expected) -> None:
    monkeypatch.setenv("TEST_FLAG", raw)
    default = object()
    result = config._env_bool("TEST_FLAG", default)  # type: ignore[arg-type]
    assert result is (default if expected is None else expected)


def test_env_list(monkeypatch) -> None:
    monkeypatch.setenv("TEST_KEYWORDS", " Bakery, STORE ,,cafe")
    assert config._env_list("TEST_KEYWORDS", ["x"]) == ["bakery", "store", "cafe"]
    monkeypatch.delenv("TEST_KEYWORDS")
    default = ["grocer"]
    result = config._env_list("TEST_KEYWORDS", default)
    assert result == default and result is not default


def test_processing_option_defaults_follow_config() -> None:
    options = ProcessingOptions()
    assert options.simplification_tolerance_m == config.SIMPLIFICATION_TOLERANCE_M
    assert options.spike_threshold_m == config.SPIKE_THRESHOLD_M
    assert options.smoothing_window == config.SMOOTHING_WINDOW
    assert options.waypoint_max_distance_m == config.WAYPOINT_MAX_DISTANCE_M
    assert options.gap_threshold_m == config.GAP_WARNING_THRESHOLD_M
    assert options.resupply_keywords == config.RESUPPLY_KEYWORDS
    assert options.resupply_keywords is not config.RESUPPLY_KEYWORDS


def test_exit_multiplier_only_with_hysteresis() -> None:
    assert ProcessingOptions(visit_hysteresis=False).exit_multiplier is None
    options = ProcessingOptions(visit_hysteresis=True, visit_exit_multiplier=2.5)
    assert options.exit_multiplier == 2.5
