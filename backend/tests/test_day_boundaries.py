from __future__ import annotations

from weektable.scheduling.boundaries import (
    extract_wake_bed_hours,
    resolve_day_boundaries,
    resolve_hours,
)


def test_wake_and_bed_hours_are_extracted() -> None:
    text = "User typically wakes up around 06:30 and goes to bed around 23:00. Eats 3 meals a day."

    assert extract_wake_bed_hours(text) == (6, 23)


def test_defaults_when_absent() -> None:
    assert extract_wake_bed_hours("") == (7, 22)
    assert extract_wake_bed_hours(None) == (7, 22)
    assert extract_wake_bed_hours("User typically wakes up around unspecified") == (7, 22)


def test_out_of_range_hours_fall_back_to_defaults() -> None:
    text = "wakes up around 25:00 and goes to bed around 99:00"

    assert extract_wake_bed_hours(text) == (7, 22)


def test_custom_defaults() -> None:
    assert extract_wake_bed_hours("", default_wake=5, default_bed=20) == (5, 20)


def test_regular_day_uses_bed_hour_as_end() -> None:
    boundaries = resolve_day_boundaries("wakes up around 06:30 and goes to bed around 23:00")

    assert (boundaries.start_hour, boundaries.end_hour) == (6, 23)
    assert boundaries.used_fallback is False


def test_bedtime_after_midnight_wraps_to_hour_24() -> None:
    boundaries = resolve_hours(23, 2)

    assert boundaries.start_hour == 23
    assert boundaries.end_hour == 24
    assert boundaries.bed_hour == 2


def test_midnight_bedtime_runs_through_hour_24() -> None:
    boundaries = resolve_day_boundaries("wakes up around 09:00 and goes to bed around 00:00")

    assert (boundaries.start_hour, boundaries.end_hour) == (9, 24)


def test_equal_wake_and_bed_uses_fallback_window() -> None:
    boundaries = resolve_hours(8, 8)

    assert (boundaries.start_hour, boundaries.end_hour) == (8, 21)
    assert boundaries.used_fallback is True


def test_custom_fallback_window() -> None:
    boundaries = resolve_hours(10, 10, fallback=(9, 18))

    assert (boundaries.start_hour, boundaries.end_hour) == (9, 18)
