"""Dividend tracker models."""

from divtrack.models.dividend import CASH_TICKER, DividendEvent, EventStatus
from divtrack.models.timeline import TimelinePoint, TimeScale
from divtrack.models.calendar import CalendarEntry, OccurrenceKind
from divtrack.models.security import SafetyScore, SecuritySearchResult, StockData

__all__ = [
    "CASH_TICKER",
    "DividendEvent",
    "EventStatus",
    "TimelinePoint",
    "TimeScale",
    "CalendarEntry",
    "OccurrenceKind",
    "SafetyScore",
    "SecuritySearchResult",
    "StockData",
]
