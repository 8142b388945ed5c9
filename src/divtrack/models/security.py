"""Security search and stock data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from divtrack.models.dividend import DividendEvent, EventStatus


@dataclass(frozen=True)
class SecuritySearchResult:
    """Single hit from a security search.

    Attributes:
        ticker: Ticker symbol.
        name: Security name.
        security_type: Security type code.
        exchange: Primary exchange.
    """

    ticker: str
    name: str
    security_type: str | None = None
    exchange: str | None = None


@dataclass(frozen=True)
class SafetyScore:
    """Dividend safety heuristic result.

    Attributes:
        score: Score between 0 and 100.
        payout_ratio: Payout ratio as a fraction, None when unknown.
        rating: Low, Medium or High.
    """

    score: float
    payout_ratio: float | None
    rating: str


@dataclass(frozen=True)
class StockData:
    """Latest price and dividend data used to prefill a new event."""

    ticker: str
    name: str
    price: float = 0.0
    dividend_yield: float = 0.0
    latest_dividend: float = 0.0
    ex_div_date: date | None = None
    payment_date: date | None = None
    safety_score: SafetyScore | None = None

    def to_event(self, today: date | None = None) -> DividendEvent:
        """Build a projected, unreceived event prefilled from this data.

        Falls back to ``today`` for the ex-date when none is published.
        """
        return DividendEvent(
            ticker=self.ticker.upper(),
            ex_date=self.ex_div_date or today or date.today(),
            pay_date=self.payment_date,
            amount=self.latest_dividend or None,
            dividend_yield=self.dividend_yield or None,
            price=self.price or None,
            received=False,
            status=EventStatus.PROJECTED,
            safety_score=self.safety_score.score if self.safety_score else None,
            safety_rating=self.safety_score.rating if self.safety_score else None,
        )
