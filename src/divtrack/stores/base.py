"""Abstract base class for dividend event stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from divtrack.models.dividend import CASH_TICKER, DividendEvent, EventStatus


class BaseEventStore(ABC):
    """Abstract base for all event stores.

    A store owns the event lifecycle: it assigns ids on create and
    persists edits and deletions. Stores raise ``DivTrackError`` with a
    specific code; the tracker turns those into load/action failures.
    """

    @abstractmethod
    def list_events(self) -> list[DividendEvent]:
        """Return every stored event, in no particular order."""
        ...

    @abstractmethod
    def create(self, event: DividendEvent) -> DividendEvent:
        """Persist a new event and return it with ``id`` assigned."""
        ...

    @abstractmethod
    def update(self, event: DividendEvent) -> DividendEvent:
        """Replace the stored event with the same ``id``."""
        ...

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        """Remove an event by id. Returns True on success."""
        ...

    def add_cash(self, amount: float, on: date, notes: str | None = None) -> DividendEvent:
        """Record a cash contribution through the regular create path."""
        return self.create(DividendEvent(
            ticker=CASH_TICKER,
            ex_date=on,
            received=True,
            amount=amount,
            price=amount,
            status=EventStatus.CONFIRMED,
            notes=notes or None,
        ))
