"""Tests for relative time phrases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gitlabctl.utils import humanize_delta

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(seconds=3), "just now"),
        (timedelta(seconds=30), "a few seconds ago"),
        (timedelta(seconds=60), "a minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(minutes=60), "an hour ago"),
        (timedelta(minutes=90), "2 hours ago"),
        (timedelta(hours=19), "19 hours ago"),
        (timedelta(hours=30), "a day ago"),
        (timedelta(days=3), "3 days ago"),
        (timedelta(days=7), "a week ago"),
        (timedelta(days=20), "2 weeks ago"),
        (timedelta(days=45), "a month ago"),
        (timedelta(days=100), "3 months ago"),
        (timedelta(days=400), "a year ago"),
        (timedelta(days=365 * 5), "5 years ago"),
    ],
)
def test_humanize_delta_thresholds(age: timedelta, expected: str) -> None:
    assert humanize_delta(NOW - age, NOW) == expected


def test_future_timestamps_read_forward() -> None:
    assert humanize_delta(NOW + timedelta(hours=3), NOW) == "in 3 hours"


def test_naive_timestamps_are_treated_as_utc() -> None:
    naive = datetime(2026, 10, 12, 12, 0)

    assert humanize_delta(naive, NOW) == "a week ago"


def test_same_inputs_give_same_output() -> None:
    then = NOW - timedelta(days=7)

    assert {humanize_delta(then, NOW) for _ in range(5)} == {"a week ago"}
