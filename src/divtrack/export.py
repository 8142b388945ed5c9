"""CSV export of the event list."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import date

import pandas as pd

from divtrack.models.dividend import DividendEvent

COLUMNS = [
    "id",
    "ticker",
    "ex_date",
    "pay_date",
    "yield",
    "received",
    "amount",
    "status",
    "notes",
    "yield_on_cost",
    "price",
    "created_at",
    "safety_score",
    "safety_rating",
]


def events_to_frame(events: Iterable[DividendEvent]) -> pd.DataFrame:
    """One row per event, dates rendered as ISO strings."""
    records = [
        {
            "id": e.id,
            "ticker": e.ticker,
            "ex_date": e.ex_date.isoformat(),
            "pay_date": e.pay_date.isoformat() if e.pay_date else None,
            "yield": e.dividend_yield,
            "received": e.received,
            "amount": e.amount,
            "status": e.status.value,
            "notes": e.notes,
            "yield_on_cost": e.yield_on_cost,
            "price": e.price,
            "created_at": e.created_at.isoformat() if e.created_at else None,
            "safety_score": e.safety_score,
            "safety_rating": e.safety_rating,
        }
        for e in events
    ]
    return pd.DataFrame(records, columns=COLUMNS)


def export_csv(events: Iterable[DividendEvent]) -> str:
    """Serialize events as CSV: header row, then one row per event.

    String fields are quoted (embedded quotes doubled), numbers and
    booleans are written bare. Returns an empty string for no events.
    """
    df = events_to_frame(events)
    if df.empty:
        return ""
    return df.to_csv(
        index=False,
        quoting=csv.QUOTE_NONNUMERIC,
        lineterminator="\n",
    ).rstrip("\n")


def export_filename(today: date | None = None) -> str:
    return f"dividend_data_{(today or date.today()).isoformat()}.csv"
