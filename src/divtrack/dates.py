"""Date parsing, keys, month arithmetic and bucket-point generation."""

from __future__ import annotations

from datetime import date, datetime, timedelta

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.timeline import TimeScale

# Monthly and quarterly series sample two years; annual samples five.
MONTHLY_SPAN = 24
ANNUAL_SPAN = 5


def parse_date(value: date | datetime | str) -> date:
    """Coerce an ISO 8601 string, date or datetime to a date.

    Raises:
        DivTrackError: VALIDATION_FAILED when the value does not parse.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as exc:
            raise DivTrackError(
                f"Invalid date: {value!r}",
                code=ErrorCode.VALIDATION_FAILED,
            ) from exc
    raise DivTrackError(
        f"Invalid date: {value!r}",
        code=ErrorCode.VALIDATION_FAILED,
    )


def as_date(value: date) -> date:
    """Drop the time part of a datetime; plain dates pass through."""
    return value.date() if isinstance(value, datetime) else value


def date_key(d: date) -> str:
    """Bucket key in ``yyyy-MM-dd`` form."""
    return d.strftime("%Y-%m-%d")


def start_of_month(d: date) -> date:
    return d.replace(day=1)


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's end."""
    return d + relativedelta(months=months)


def days_in_month(year: int, month: int) -> int:
    first = date(year, month, 1)
    return (add_months(first, 1) - first).days


def coerce_scale(scale: TimeScale | str) -> TimeScale:
    """Accept a TimeScale or its string value.

    Raises:
        DivTrackError: VALIDATION_FAILED for an unknown scale.
    """
    if isinstance(scale, TimeScale):
        return scale
    try:
        return TimeScale(str(scale).strip().lower())
    except ValueError as exc:
        valid = ", ".join(s.value for s in TimeScale)
        raise DivTrackError(
            f"Invalid time scale: {scale!r}. Valid: {valid}",
            code=ErrorCode.VALIDATION_FAILED,
        ) from exc


def date_points(first: date, end: date, scale: TimeScale) -> list[date]:
    """Generate the sampled dates of a timeline.

    Args:
        first: Earliest event date; anchors every series.
        end: Last date allowed in the series (inclusive).
        scale: Sampling granularity.

    Returns:
        Ascending list of dates, empty when ``first`` is after ``end``.
    """
    first = as_date(first)
    end = as_date(end)
    if first > end:
        return []

    if scale is TimeScale.DAILY or scale is TimeScale.WEEKLY:
        step = 1 if scale is TimeScale.DAILY else 7
        points: list[date] = []
        current = first
        while current <= end:
            points.append(current)
            current += timedelta(days=step)
        return points

    if scale is TimeScale.ANNUALLY:
        candidates = [
            start_of_month(add_months(first, i * 12)) for i in range(ANNUAL_SPAN)
        ]
        return [d for d in candidates if d <= end]

    months = [start_of_month(add_months(first, i)) for i in range(MONTHLY_SPAN)]
    if scale is TimeScale.QUARTERLY:
        months = [d for i, d in enumerate(months) if i % 3 == 0]
    return [d for d in months if d <= end]
