from __future__ import annotations

import pytest

from weektable.scheduling.models import DayOfWeek, Frequency, PreferredTime
from weektable.scheduling.parser import (
    ParseError,
    parse_activities,
    parse_activity_line,
    parse_clock,
    parse_commitment_entry,
    parse_commitments,
    parse_time_range,
)


def test_uniform_commitment_applies_to_every_listed_day() -> None:
    commitments = parse_commitments("Work: Mon, Tue, Wed, Thu, Fri. Uniform time: 09:00 to 17:00.")

    assert len(commitments) == 1
    work = commitments[0]
    assert work.name == "Work"
    assert [interval.day for interval in work.intervals] == [
        DayOfWeek.MON,
        DayOfWeek.TUE,
        DayOfWeek.WED,
        DayOfWeek.THU,
        DayOfWeek.FRI,
    ]
    assert {(interval.start_minute, interval.end_minute) for interval in work.intervals} == {(540, 1020)}


def test_specific_times_keep_minute_precision() -> None:
    commitment = parse_commitment_entry(
        "Gym class: Mon, Wed. Specific times: Mon: 18:00 to 19:30; Wed: 07:15 to 08:00."
    )

    assert commitment.name == "Gym class"
    first, second = commitment.intervals
    assert (first.day, first.start_time, first.end_time) == (DayOfWeek.MON, "18:00", "19:30")
    assert (second.day, second.start_time, second.end_time) == (DayOfWeek.WED, "07:15", "08:00")


def test_malformed_paragraphs_are_dropped_silently() -> None:
    text = "\n\n".join(
        [
            "Work: Mon, Tue. Uniform time: 09:00 to 17:00.",
            "Broken entry without any separator",
            "Yoga: (No specific days selected). Uniform time: 10:00 to 11:00.",
            "Choir: Thu. (Time configuration incomplete).",
            "Class: Sat. Specific times: Sat: 10:00 to 12:00.",
        ]
    )

    commitments = parse_commitments(text)

    assert [commitment.name for commitment in commitments] == ["Work", "Class"]


def test_bad_specific_entry_is_skipped_but_the_rest_survives() -> None:
    commitment = parse_commitment_entry(
        "Lab: Mon, Tue. Specific times: Mon: 25:00 to 26:00; Tue: 10:00 to 11:00; Funday: 09:00 to 10:00."
    )

    assert len(commitment.intervals) == 1
    assert commitment.intervals[0].day == DayOfWeek.TUE


def test_specific_times_for_unlisted_days_are_dropped() -> None:
    assert parse_commitments("Gym: Mon. Specific times: Tue: 09:00 to 10:00.") == []

    commitment = parse_commitment_entry(
        "Gym: Mon, Wed. Specific times: Mon: 18:00 to 19:00; Tue: 09:00 to 10:00; Wed: 07:00 to 08:00."
    )
    assert [interval.day for interval in commitment.intervals] == [DayOfWeek.MON, DayOfWeek.WED]


def test_inverted_range_yields_no_commitment() -> None:
    assert parse_commitments("Night shift: Fri. Uniform time: 22:00 to 02:00.") == []


def test_commitment_sentinel_and_empty_input() -> None:
    assert parse_commitments("No fixed commitments specified.") == []
    assert parse_commitments("") == []
    assert parse_commitments(None) == []


def test_full_day_names_are_accepted() -> None:
    commitment = parse_commitment_entry("Church: Sunday. Uniform time: 10:00 to 11:30.")

    assert commitment.intervals[0].day == DayOfWeek.SUN


def test_activity_line_is_parsed() -> None:
    activity = parse_activity_line(
        "Guitar practice: 4 hours weekly, Min/Max Session: 1h/2h, Preferred time: evening"
    )

    assert activity.name == "Guitar practice"
    assert activity.total_hours == 4
    assert activity.min_session_hours == 1
    assert activity.max_session_hours == 2
    assert activity.frequency == Frequency.WEEKLY
    assert activity.preferred_time == PreferredTime.EVENING


def test_activity_keywords_are_case_insensitive() -> None:
    activity = parse_activity_line("Reading: 0.5 HOURS Daily, min/max session: 0.5h/1H, preferred time: Morning")

    assert activity.frequency == Frequency.DAILY
    assert activity.preferred_time == PreferredTime.MORNING
    assert activity.total_hours == 0.5


def test_activities_skip_non_matching_and_invalid_lines() -> None:
    text = "\n".join(
        [
            "Reading: 1 hours daily, Min/Max Session: 0.5h/1.5h, Preferred time: evening",
            "just some notes about my week",
            "Running: 3 hours daily, Min/Max Session: 0.5h/1h, Preferred time: morning",
            "Piano: 0.5 hours weekly, Min/Max Session: 1h/2h, Preferred time: any",
            "Chess: 2 hours monthly, Min/Max Session: 1h/2h, Preferred time: any",
            "",
            "Swim: 2 hours weekly, Min/Max Session: 1h/1h, Preferred time: afternoon (pool opens at noon)",
        ]
    )

    activities = parse_activities(text)

    assert [activity.name for activity in activities] == ["Reading", "Swim"]


def test_activity_sentinel() -> None:
    assert parse_activities("No desired activities specified.") == []


def test_clock_parsing() -> None:
    assert parse_clock("00:00") == 0
    assert parse_clock("07:05") == 425
    assert parse_clock("24:00") == 1440
    for bad in ("7:5", "12:60", "24:30", "ab:cd", "1200"):
        with pytest.raises(ParseError):
            parse_clock(bad)


def test_time_range_requires_start_before_end() -> None:
    assert parse_time_range("09:00 to 10:30.") == (540, 630)
    with pytest.raises(ParseError):
        parse_time_range("10:00 to 10:00")
    with pytest.raises(ParseError):
        parse_time_range("10:00 - 11:00")
