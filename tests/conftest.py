"""Shared fixtures for divtrack tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from divtrack.models.dividend import DividendEvent, EventStatus
from divtrack.securities.mock import MockSecuritiesProvider
from divtrack.stores.mock import MockEventStore


@pytest.fixture
def today() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def mock_store() -> MockEventStore:
    return MockEventStore()


@pytest.fixture
def mock_securities() -> MockSecuritiesProvider:
    return MockSecuritiesProvider()


@pytest.fixture
def sample_events() -> list[DividendEvent]:
    """Two received dividends, one projected, one cash contribution."""
    return [
        DividendEvent(
            id="id-1",
            ticker="AAPL",
            ex_date=date(2024, 1, 15),
            pay_date=date(2024, 2, 1),
            amount=0.50,
            price=185.0,
            dividend_yield=0.5,
            received=True,
            status=EventStatus.CONFIRMED,
        ),
        DividendEvent(
            id="id-2",
            ticker="MSFT",
            ex_date=date(2024, 2, 14),
            pay_date=date(2024, 3, 14),
            amount=0.75,
            price=405.0,
            received=True,
            status=EventStatus.CONFIRMED,
            notes="Quarterly, reinvested",
        ),
        DividendEvent(
            id="id-3",
            ticker="JNJ",
            ex_date=date(2024, 5, 20),
            pay_date=date(2024, 6, 4),
            amount=1.24,
            price=150.0,
            received=False,
            status=EventStatus.PROJECTED,
            safety_score=90.0,
            safety_rating="High",
        ),
        DividendEvent(
            id="cash-4",
            ticker="CASH",
            ex_date=date(2024, 1, 10),
            amount=1000.0,
            price=1000.0,
            received=True,
            status=EventStatus.CONFIRMED,
            notes="Initial Roth Contribution",
        ),
    ]
