"""Tests for text search and dashboard filters."""

from datetime import date

import pytest

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.filters import (
    DividendFilters,
    ListSort,
    apply_filters,
    paginate,
    search_events,
    sort_events,
    visible_series,
)
from divtrack.models.dividend import DividendEvent
from divtrack.models.timeline import TimeScale


class TestSearchEvents:
    def test_blank_query_returns_all(self, sample_events):
        assert search_events(sample_events, None) == sample_events
        assert search_events(sample_events, "   ") == sample_events

    def test_matches_ticker_case_insensitive(self, sample_events):
        assert [e.ticker for e in search_events(sample_events, "msf")] == ["MSFT"]

    def test_matches_notes(self, sample_events):
        assert [e.ticker for e in search_events(sample_events, "roth")] == ["CASH"]

    def test_no_match(self, sample_events):
        assert search_events(sample_events, "zzz") == []


class TestApplyFilters:
    def test_default_filters_keep_everything(self, sample_events):
        assert apply_filters(sample_events, DividendFilters()) == sample_events

    def test_ticker(self, sample_events):
        result = apply_filters(sample_events, DividendFilters(ticker="jnj"))
        assert [e.ticker for e in result] == ["JNJ"]

    def test_min_safety_score_drops_unscored(self, sample_events):
        result = apply_filters(sample_events, DividendFilters(min_safety_score=50))
        assert [e.ticker for e in result] == ["JNJ"]


class TestDividendFilters:
    def test_updated_returns_copy(self):
        filters = DividendFilters()
        changed = filters.updated(show_cash_utilized=False, time_scale="weekly")
        assert filters.show_cash_utilized is True
        assert changed.show_cash_utilized is False
        assert changed.time_scale is TimeScale.WEEKLY

    def test_updated_rejects_bad_scale(self):
        with pytest.raises(DivTrackError):
            DividendFilters().updated(time_scale="hourly")

    def test_visible_series(self):
        filters = DividendFilters(show_dividends_paid=False)
        assert visible_series(filters) == ["cash_utilized", "cumulative_projected"]


def _tickers(events):
    return [e.ticker for e in events]


class TestSortEvents:
    def test_default_is_newest_ex_date_first(self, sample_events):
        assert _tickers(sort_events(sample_events)) == ["JNJ", "MSFT", "AAPL", "CASH"]

    def test_ascending(self, sample_events):
        result = sort_events(sample_events, "ex_date", descending=False)
        assert _tickers(result) == ["CASH", "AAPL", "MSFT", "JNJ"]

    def test_missing_pay_date_counts_as_epoch(self, sample_events):
        # CASH has no pay date
        assert _tickers(sort_events(sample_events, "payDate", descending=False))[0] == "CASH"
        assert _tickers(sort_events(sample_events, "pay_date"))[-1] == "CASH"

    def test_numbers(self, sample_events):
        result = sort_events(sample_events, "amount", descending=True)
        assert [e.amount for e in result] == [1000.0, 1.24, 0.75, 0.50]

    def test_strings_ignore_case(self):
        events = [
            DividendEvent(ticker="b", ex_date=date(2024, 1, 1)),
            DividendEvent(ticker="A", ex_date=date(2024, 1, 1)),
            DividendEvent(ticker="c", ex_date=date(2024, 1, 1)),
        ]
        assert _tickers(sort_events(events, "ticker", descending=False)) == ["A", "b", "c"]

    def test_booleans(self, sample_events):
        result = sort_events(sample_events, "received", descending=False)
        assert result[0].ticker == "JNJ"
        assert all(e.received for e in result[1:])

    def test_missing_values_trail_both_directions(self, sample_events):
        # only JNJ has a safety score
        assert _tickers(sort_events(sample_events, "safety_score", descending=False))[0] == "JNJ"
        assert _tickers(sort_events(sample_events, "safety_score", descending=True))[0] == "JNJ"

    def test_status_sorts_by_value(self, sample_events):
        result = sort_events(sample_events, "status", descending=True)
        assert result[0].ticker == "JNJ"

    def test_stable_for_ties(self):
        events = [
            DividendEvent(ticker=t, ex_date=date(2024, 3, 1)) for t in ("X", "Y", "Z")
        ]
        assert _tickers(sort_events(events)) == ["X", "Y", "Z"]

    def test_unknown_field(self, sample_events):
        with pytest.raises(DivTrackError) as exc_info:
            sort_events(sample_events, "sharpe")
        assert exc_info.value.code == ErrorCode.VALIDATION_FAILED


class TestListSort:
    def test_defaults(self):
        assert ListSort() == ListSort("ex_date", True)

    def test_same_field_flips(self):
        assert ListSort().toggled("exDate") == ListSort("ex_date", False)
        assert ListSort("amount", False).toggled("amount") == ListSort("amount", True)

    def test_new_field_starts_ascending(self):
        assert ListSort().toggled("ticker") == ListSort("ticker", False)


class TestPaginate:
    def test_first_page(self, sample_events):
        items, total = paginate(sample_events, 1, per_page=3)
        assert items == sample_events[:3]
        assert total == 2

    def test_last_partial_page(self):
        events = [DividendEvent(ticker=f"T{i}", ex_date=date(2024, 1, 1)) for i in range(23)]
        items, total = paginate(events, 3)
        assert total == 3
        assert _tickers(items) == ["T20", "T21", "T22"]

    def test_page_past_end(self, sample_events):
        assert paginate(sample_events, 5) == ([], 1)

    def test_empty(self):
        assert paginate([], 1) == ([], 0)

    @pytest.mark.parametrize("page,per_page", [(0, 10), (1, 0)])
    def test_invalid_page(self, page, per_page):
        with pytest.raises(DivTrackError):
            paginate([], page, per_page)
