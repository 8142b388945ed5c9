"""Calendar entry data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from divtrack.models.dividend import DividendEvent


class OccurrenceKind(Enum):
    """Which date of an event a calendar entry represents."""

    EX_DATE = "ex_date"
    PAY_DATE = "pay_date"


@dataclass(frozen=True)
class CalendarEntry:
    """One occurrence of an event on the calendar.

    The same event appears once per occurrence; the wrapped event is
    shared by reference, never copied or annotated.
    """

    event: DividendEvent
    kind: OccurrenceKind

    @property
    def date(self) -> date:
        if self.kind is OccurrenceKind.PAY_DATE and self.event.pay_date is not None:
            return self.event.pay_date
        return self.event.ex_date

    @property
    def label(self) -> str:
        return "(Ex)" if self.kind is OccurrenceKind.EX_DATE else "(Pay)"
