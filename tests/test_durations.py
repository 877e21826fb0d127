from datetime import timedelta

import pytest

from watchkeeper.durations import VERSION, format_duration, user_agent


def test_zero_duration():
    assert format_duration(0) == "0 seconds"


@pytest.mark.parametrize(
    "seconds, expected",
    [(3600, "1 hour"), (60, "1 minute"), (1, "1 second")],
)
def test_singular_units(seconds, expected):
    assert format_duration(seconds) == expected


def test_all_units_joined():
    assert format_duration(3661) == "1 hour, 1 minute, 1 second"


def test_hours_and_minutes_without_seconds():
    assert format_duration(9000) == "2 hours, 30 minutes"


@pytest.mark.parametrize("seconds", [0, 1, 59, 61, 3600, 3661, 86399, 90000])
def test_timedelta_matches_seconds(seconds):
    assert format_duration(timedelta(seconds=seconds)) == format_duration(seconds)


@pytest.mark.parametrize("seconds", [0.4, 59.9, 3600.999])
def test_fractions_are_dropped(seconds):
    assert format_duration(seconds) == format_duration(int(seconds))


@pytest.mark.parametrize("seconds", [7200, 120, 2])
def test_plural_units(seconds):
    result = format_duration(seconds)
    assert result.startswith("2 ")
    assert result.endswith("s")
    assert ", " not in result


def test_hours_are_not_wrapped():
    result = format_duration(timedelta(hours=30))
    assert result.startswith("30 hours")
    assert "minute" not in result
    assert "second" not in result


def test_user_agent_default_version():
    assert user_agent() == "Watchtower/v0.0.0-unknown"
    assert VERSION == "v0.0.0-unknown"


def test_user_agent_custom_version():
    assert user_agent("v1.5.3") == "Watchtower/v1.5.3"