"""Timeline point data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from divtrack.models.dividend import DividendEvent


class TimeScale(Enum):
    """Bucket granularity used to sample the cumulative timeline."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


@dataclass(frozen=True)
class TimelinePoint:
    """Cumulative totals at one sampled date.

    Attributes:
        date: Sampled date.
        cash_utilized: Running total of price x share multiplier.
        cumulative_paid: Running total of received amounts.
        cumulative_projected: Paid plus not-yet-received amounts.
        events: Events whose ex-date is exactly this date.
    """

    date: date
    cash_utilized: float = 0.0
    cumulative_paid: float = 0.0
    cumulative_projected: float = 0.0
    events: tuple[DividendEvent, ...] = ()

    @property
    def key(self) -> str:
        return self.date.isoformat()
