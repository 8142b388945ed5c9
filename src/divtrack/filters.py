"""Text search and dashboard filters, plus list sorting and paging."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

from divtrack.dates import coerce_scale
from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.dividend import DividendEvent
from divtrack.models.timeline import TimeScale
from divtrack.validation import field_name

ITEMS_PER_PAGE = 10

SORT_FIELDS = frozenset(f.name for f in fields(DividendEvent))
# Compared as timestamps; a missing value counts as the epoch.
_TIMESTAMP_FIELDS = frozenset({"ex_date", "pay_date", "created_at"})


@dataclass(frozen=True)
class DividendFilters:
    """Dashboard filter state.

    Attributes:
        show_cash_utilized: Plot the cash utilized series.
        show_dividends_paid: Plot the cumulative paid series.
        show_projected_dividends: Plot the cumulative projected series.
        ticker: Restrict to one ticker (case-insensitive).
        time_scale: Timeline granularity.
        min_safety_score: Drop events scored below this value.
    """

    show_cash_utilized: bool = True
    show_dividends_paid: bool = True
    show_projected_dividends: bool = True
    ticker: str | None = None
    time_scale: TimeScale = TimeScale.MONTHLY
    min_safety_score: float | None = None

    def updated(self, **changes: Any) -> DividendFilters:
        """Return a copy with ``changes`` merged in."""
        if "time_scale" in changes:
            changes["time_scale"] = coerce_scale(changes["time_scale"])
        return replace(self, **changes)


def search_events(events: Iterable[DividendEvent], query: str | None) -> list[DividendEvent]:
    """Events whose ticker or notes contain ``query``, ignoring case."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(events)
    return [
        e for e in events
        if needle in e.ticker.lower() or (e.notes and needle in e.notes.lower())
    ]


def apply_filters(
    events: Iterable[DividendEvent],
    filters: DividendFilters,
) -> list[DividendEvent]:
    """Apply ticker and minimum safety score restrictions."""
    result = list(events)
    if filters.ticker:
        wanted = filters.ticker.strip().upper()
        result = [e for e in result if e.ticker.upper() == wanted]
    if filters.min_safety_score is not None:
        result = [
            e for e in result
            if e.safety_score is not None and e.safety_score >= filters.min_safety_score
        ]
    return result


def visible_series(filters: DividendFilters) -> list[str]:
    """Timeline series names switched on by the filter toggles."""
    series: list[str] = []
    if filters.show_cash_utilized:
        series.append("cash_utilized")
    if filters.show_dividends_paid:
        series.append("cumulative_paid")
    if filters.show_projected_dividends:
        series.append("cumulative_projected")
    return series


@dataclass(frozen=True)
class ListSort:
    """Sort state of the event list; newest ex-date first by default."""

    field: str = "ex_date"
    descending: bool = True

    def toggled(self, field: str) -> ListSort:
        """Sort state after a header click on ``field``.

        Clicking the current field flips the direction; a new field starts
        ascending.
        """
        name = _sort_field(field)
        if name == self.field:
            return ListSort(name, not self.descending)
        return ListSort(name, False)


def _sort_field(field: str) -> str:
    name = field_name(field)
    if name not in SORT_FIELDS:
        raise DivTrackError(
            f"Cannot sort by {field!r}",
            code=ErrorCode.VALIDATION_FAILED,
        )
    return name


def _timestamp(value: date | None) -> float:
    if value is None:
        return 0.0
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc).timestamp()


def _sort_key(value: Any) -> Any:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str):
        return value.casefold()
    if isinstance(value, bool):
        return int(value)
    return value


def sort_events(
    events: Iterable[DividendEvent],
    field: str = "ex_date",
    descending: bool = True,
) -> list[DividendEvent]:
    """Stable sort of events by one field.

    Date fields compare as timestamps with missing dates at the epoch, so
    they come first ascending and last descending. For every other field,
    events without a value keep their relative order after the rest in
    either direction.

    Raises:
        DivTrackError: VALIDATION_FAILED for a field events do not have.
    """
    name = _sort_field(field)
    events = list(events)
    if name in _TIMESTAMP_FIELDS:
        return sorted(events, key=lambda e: _timestamp(getattr(e, name)), reverse=descending)

    present = [e for e in events if getattr(e, name) is not None]
    missing = [e for e in events if getattr(e, name) is None]
    present.sort(key=lambda e: _sort_key(getattr(e, name)), reverse=descending)
    return present + missing


def paginate(
    events: Sequence[DividendEvent],
    page: int = 1,
    per_page: int = ITEMS_PER_PAGE,
) -> tuple[list[DividendEvent], int]:
    """Slice out one 1-based page.

    Returns:
        The page's events and the total page count. A page past the end is
        empty; no events means zero pages.
    """
    if page < 1 or per_page < 1:
        raise DivTrackError(
            f"Invalid page {page} of size {per_page}",
            code=ErrorCode.VALIDATION_FAILED,
        )
    total_pages = math.ceil(len(events) / per_page)
    start = (page - 1) * per_page
    return list(events[start:start + per_page]), total_pages
