"""Cumulative dividend timeline for the performance chart.

Turns a flat list of dividend and cash events into time-bucketed running
totals: cash utilized, dividends paid, and dividends projected (paid plus
scheduled but not yet received).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

import pandas as pd

from divtrack.dates import add_months, as_date, coerce_scale, date_points
from divtrack.models.dividend import DividendEvent
from divtrack.models.timeline import TimelinePoint, TimeScale

# Policy constants, not measured holdings: every priced event is assumed
# to be a 100-share purchase, and the chart projects a year past today.
SHARE_MULTIPLIER = 100
PROJECTION_MONTHS = 12


def build_timeline(
    events: Iterable[DividendEvent],
    scale: TimeScale | str = TimeScale.MONTHLY,
    *,
    now: date | None = None,
    share_multiplier: float = SHARE_MULTIPLIER,
    projection_months: int = PROJECTION_MONTHS,
) -> list[TimelinePoint]:
    """Build the ordered cumulative series for a time scale.

    Args:
        events: Event snapshot, in any order.
        scale: Sampling granularity (enum or its string value).
        now: Reference "today" for the projection window.
        share_multiplier: Shares assumed per priced event.
        projection_months: Months past ``now`` covered by the series.

    Returns:
        Points ascending by date. Empty when there are no events or the
        earliest event is past the projection window.
    """
    scale = coerce_scale(scale)
    ordered = sorted(events, key=lambda e: as_date(e.ex_date))
    if not ordered:
        return []

    end = add_months(as_date(now or date.today()), projection_months)
    points = date_points(as_date(ordered[0].ex_date), end, scale)

    priced = [e for e in ordered if e.price]
    by_pay_date = sorted(
        (e for e in ordered if e.amount),
        key=lambda e: as_date(e.effective_pay_date),
    )

    cash_utilized = 0.0
    paid = 0.0
    pending = 0.0
    i_priced = 0
    i_paid = 0
    i_exact = 0

    timeline: list[TimelinePoint] = []
    for d in points:
        while i_priced < len(priced) and as_date(priced[i_priced].ex_date) <= d:
            cash_utilized += float(priced[i_priced].price) * share_multiplier
            i_priced += 1

        while i_paid < len(by_pay_date) and as_date(by_pay_date[i_paid].effective_pay_date) <= d:
            event = by_pay_date[i_paid]
            if event.received:
                paid += float(event.amount)
            else:
                pending += float(event.amount)
            i_paid += 1

        while i_exact < len(ordered) and as_date(ordered[i_exact].ex_date) < d:
            i_exact += 1
        on_day: list[DividendEvent] = []
        j = i_exact
        while j < len(ordered) and as_date(ordered[j].ex_date) == d:
            on_day.append(ordered[j])
            j += 1

        timeline.append(TimelinePoint(
            date=d,
            cash_utilized=cash_utilized,
            cumulative_paid=paid,
            cumulative_projected=paid + pending,
            events=tuple(on_day),
        ))

    return timeline


def timeline_to_frame(points: list[TimelinePoint]) -> pd.DataFrame:
    """Chart-ready table with one row per timeline point."""
    records = [
        {
            "date": p.key,
            "cash_utilized": p.cash_utilized,
            "cumulative_paid": p.cumulative_paid,
            "cumulative_projected": p.cumulative_projected,
            "event_count": len(p.events),
        }
        for p in points
    ]
    return pd.DataFrame(
        records,
        columns=[
            "date", "cash_utilized", "cumulative_paid",
            "cumulative_projected", "event_count",
        ],
    )
