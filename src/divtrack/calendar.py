"""Calendar bucketing of dividend events by ex-date and pay date."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from divtrack.dates import date_key, days_in_month, parse_date
from divtrack.models.calendar import CalendarEntry, OccurrenceKind
from divtrack.models.dividend import DividendEvent


def bucket_events(events: Iterable[DividendEvent]) -> dict[str, list[CalendarEntry]]:
    """Fan events out into per-day buckets keyed ``yyyy-MM-dd``.

    Every event lands in its ex-date bucket; events with a pay date land a
    second time in the pay-date bucket. An event paid on its ex-date shows
    up twice in the same bucket, once per occurrence.
    """
    buckets: dict[str, list[CalendarEntry]] = {}
    for event in events:
        buckets.setdefault(date_key(event.ex_date), []).append(
            CalendarEntry(event, OccurrenceKind.EX_DATE)
        )
        if event.pay_date is not None:
            buckets.setdefault(date_key(event.pay_date), []).append(
                CalendarEntry(event, OccurrenceKind.PAY_DATE)
            )
    return buckets


def events_on(
    buckets: Mapping[str, list[CalendarEntry]],
    day: date | str,
) -> list[CalendarEntry]:
    """Entries for a clicked day; an empty list means nothing to show."""
    key = date_key(parse_date(day))
    return list(buckets.get(key, []))


def month_days(year: int, month: int) -> list[date]:
    """Every day of a month, in order."""
    first = date(year, month, 1)
    return [first + timedelta(days=i) for i in range(days_in_month(year, month))]


def leading_blank_days(year: int, month: int) -> int:
    """Empty grid cells before day 1 in a Sunday-first week layout."""
    # date.weekday() is Monday=0; shift so Sunday=0
    return (date(year, month, 1).weekday() + 1) % 7


def month_view(
    buckets: Mapping[str, list[CalendarEntry]],
    year: int,
    month: int,
) -> list[tuple[date, list[CalendarEntry]]]:
    """Each day of the displayed month paired with its entries."""
    return [(d, list(buckets.get(date_key(d), []))) for d in month_days(year, month)]
