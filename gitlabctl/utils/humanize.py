"""Relative time phrases such as "19 hours ago" or "a week ago"."""
from datetime import datetime, timedelta, timezone
from typing import Optional

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

# (upper bound in seconds, singular phrase, unit size for the plural form)
# A None unit means the phrase is used as is.
_SCALE = (
    (10, "just now", None),
    (45, "a few seconds", None),
    (90, "a minute", None),
    (45 * MINUTE, "minutes", MINUTE),
    (90 * MINUTE, "an hour", None),
    (DAY, "hours", HOUR),
    (2 * DAY, "a day", None),
    (WEEK, "days", DAY),
    (2 * WEEK, "a week", None),
    (MONTH, "weeks", WEEK),
    (2 * MONTH, "a month", None),
    (YEAR, "months", MONTH),
    (2 * YEAR, "a year", None),
)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def humanize_delta(then: datetime, now: Optional[datetime] = None) -> str:
    """Describe ``then`` relative to ``now``; deterministic for a fixed ``now``.

    Naive datetimes are taken to be UTC.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    delta: timedelta = now - _as_utc(then)
    seconds = delta.total_seconds()
    future = seconds < 0
    seconds = abs(seconds)

    phrase = None
    for bound, text, unit in _SCALE:
        if seconds < bound:
            phrase = text if unit is None else f"{max(2, int(seconds // unit))} {text}"
            break
    if phrase is None:
        phrase = f"{max(2, int(seconds // YEAR))} years"

    if phrase == "just now":
        return phrase
    return f"in {phrase}" if future else f"{phrase} ago"
