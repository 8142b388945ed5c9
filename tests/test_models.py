"""Tests for data models."""

from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from divtrack.models.dividend import DividendEvent, EventStatus
from divtrack.models.security import SafetyScore, StockData
from divtrack.models.timeline import TimelinePoint


class TestDividendEvent:
    def test_defaults(self):
        event = DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 15))
        assert event.received is False
        assert event.status is EventStatus.PROJECTED
        assert event.id is None
        assert event.amount is None

    def test_frozen(self):
        event = DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 15))
        with pytest.raises(FrozenInstanceError):
            event.amount = 1.0  # type: ignore[misc]

    def test_is_cash(self):
        assert DividendEvent(ticker="CASH", ex_date=date(2024, 1, 1)).is_cash
        assert not DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 1)).is_cash

    def test_effective_pay_date(self):
        event = DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 15))
        assert event.effective_pay_date == date(2024, 1, 15)
        paid = DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 15), pay_date=date(2024, 2, 1))
        assert paid.effective_pay_date == date(2024, 2, 1)


class TestTimelinePoint:
    def test_key(self):
        assert TimelinePoint(date=date(2024, 2, 1)).key == "2024-02-01"

    def test_defaults(self):
        point = TimelinePoint(date=date(2024, 2, 1))
        assert point.cash_utilized == 0.0
        assert point.events == ()


class TestStockData:
    def test_to_event_prefill(self):
        data = StockData(
            ticker="aapl",
            name="Apple Inc.",
            price=190.0,
            dividend_yield=0.5,
            latest_dividend=0.25,
            ex_div_date=date(2024, 5, 10),
            payment_date=date(2024, 5, 16),
            safety_score=SafetyScore(score=90.0, payout_ratio=0.15, rating="High"),
        )
        event = data.to_event()
        assert event.ticker == "AAPL"
        assert event.ex_date == date(2024, 5, 10)
        assert event.pay_date == date(2024, 5, 16)
        assert event.amount == 0.25
        assert event.price == 190.0
        assert event.received is False
        assert event.status is EventStatus.PROJECTED
        assert event.safety_rating == "High"
        assert event.id is None

    def test_to_event_fallbacks(self):
        event = StockData(ticker="XYZ", name="XYZ").to_event(today=date(2024, 6, 15))
        assert event.ex_date == date(2024, 6, 15)
        assert event.amount is None
        assert event.price is None
        assert event.safety_score is None
