"""Dividend event data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

CASH_TICKER = "CASH"


class EventStatus(Enum):
    """Confirmation status of a dividend event."""

    CONFIRMED = "Confirmed"
    PROJECTED = "Projected"


@dataclass(frozen=True)
class DividendEvent:
    """Recorded dividend or cash contribution.

    A ticker of ``CASH`` marks a cash contribution; ``ex_date`` is then the
    contribution date and ``amount`` the cash amount.

    Attributes:
        ticker: Ticker symbol, or ``CASH``.
        ex_date: Ex-dividend date (contribution date for cash).
        received: Whether the cash has actually been received.
        id: Store-assigned identifier, None for unsaved events.
        pay_date: Payment date.
        amount: Dividend amount, or cash amount for ``CASH`` events.
        dividend_yield: Dividend yield in percent.
        yield_on_cost: Yield on cost in percent.
        price: Share price at the event.
        status: Confirmed or projected.
        notes: Free text.
        created_at: Creation timestamp set by the store.
        safety_score: Dividend safety score (0-100).
        safety_rating: Low, Medium or High.
    """

    ticker: str
    ex_date: date
    received: bool = False
    id: str | None = None
    pay_date: date | None = None
    amount: float | None = None
    dividend_yield: float | None = None
    yield_on_cost: float | None = None
    price: float | None = None
    status: EventStatus = EventStatus.PROJECTED
    notes: str | None = None
    created_at: datetime | None = None
    safety_score: float | None = None
    safety_rating: str | None = None

    @property
    def is_cash(self) -> bool:
        return self.ticker == CASH_TICKER

    @property
    def effective_pay_date(self) -> date:
        """Pay date when known, else the ex-date."""
        return self.pay_date or self.ex_date
