"""In-memory event store for demos, testing and CI — no backend required."""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import replace
from datetime import date, datetime, timezone

from divtrack.dates import add_months
from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.dividend import DividendEvent, EventStatus
from divtrack.stores.base import BaseEventStore

log = logging.getLogger(__name__)

DEMO_TICKERS = ("AAPL", "MSFT", "GOOGL", "AMZN", "BRK.B", "JNJ", "JPM", "PG", "XOM", "INTC")


class MockEventStore(BaseEventStore):
    """Dict-backed store keyed by event id.

    Use ``set_events`` to pre-load data or ``seed_demo_data`` for a
    synthetic portfolio.
    """

    def __init__(self) -> None:
        self._events: dict[str, DividendEvent] = {}
        self._ids = itertools.count(1)

    # --- Pre-load helpers ---

    def set_events(self, events: list[DividendEvent]) -> None:
        """Replace the contents, assigning ids to events that lack one."""
        self._events.clear()
        for event in events:
            if event.id is None:
                event = replace(event, id=self._next_id(event))
            self._events[event.id] = event

    def seed_demo_data(
        self,
        count: int = 15,
        today: date | None = None,
        rng: random.Random | None = None,
    ) -> list[DividendEvent]:
        """Fill the store with random dividends plus two cash contributions.

        Pass a seeded ``rng`` for reproducible data.
        """
        rng = rng or random.Random()
        today = today or date.today()
        now = datetime.now(timezone.utc)

        events: list[DividendEvent] = []
        for _ in range(count):
            ticker = rng.choice(DEMO_TICKERS)
            ex_date = add_months(today, -rng.randrange(6))
            price = 50 + rng.random() * 150
            amount = price * (0.01 + rng.random() * 0.03) / 4  # quarterly
            annual_yield = amount * 4 / price * 100
            events.append(DividendEvent(
                ticker=ticker,
                ex_date=ex_date,
                pay_date=add_months(ex_date, 1),
                dividend_yield=round(annual_yield, 2),
                received=rng.random() > 0.5,
                amount=round(amount, 4),
                status=EventStatus.CONFIRMED if rng.random() > 0.3 else EventStatus.PROJECTED,
                price=round(price, 2),
                yield_on_cost=round(annual_yield, 2),
                notes=f"Sample note for {ticker}" if rng.random() > 0.7 else None,
                created_at=now,
            ))

        for months_back, amount, notes in (
            (2, 1000.0, "Initial Roth Contribution"),
            (1, 500.0, "Reinvested dividends"),
        ):
            events.append(DividendEvent(
                ticker="CASH",
                ex_date=add_months(today, -months_back),
                received=True,
                amount=amount,
                price=amount,
                status=EventStatus.CONFIRMED,
                notes=notes,
                created_at=now,
            ))

        self.set_events(events)
        log.info("Seeded mock store with %d events", len(events))
        return self.list_events()

    # --- Store implementation ---

    def list_events(self) -> list[DividendEvent]:
        return list(self._events.values())

    def create(self, event: DividendEvent) -> DividendEvent:
        created = replace(
            event,
            id=self._next_id(event),
            created_at=datetime.now(timezone.utc),
        )
        self._events[created.id] = created
        return created

    def update(self, event: DividendEvent) -> DividendEvent:
        self._require(event.id)
        self._events[event.id] = event
        return event

    def delete(self, event_id: str) -> bool:
        self._require(event_id)
        del self._events[event_id]
        return True

    # --- Internal ---

    def _next_id(self, event: DividendEvent) -> str:
        prefix = "cash" if event.is_cash else "id"
        return f"{prefix}-{next(self._ids)}"

    def _require(self, event_id: str | None) -> None:
        if event_id is None or event_id not in self._events:
            raise DivTrackError(
                f"No event with id {event_id!r}",
                code=ErrorCode.NOT_FOUND,
            )
