"""Tests for the cumulative timeline aggregator."""

from datetime import date, datetime

import pytest

from divtrack.errors import DivTrackError, ErrorCode
from divtrack.models.dividend import DividendEvent
from divtrack.models.timeline import TimeScale
from divtrack.timeline import build_timeline, timeline_to_frame

NOW = date(2024, 6, 15)


def _by_date(points):
    return {p.date: p for p in points}


class TestScenarios:
    def test_paid_appears_on_pay_date(self):
        events = [DividendEvent(
            ticker="AAPL",
            ex_date=date(2024, 1, 15),
            pay_date=date(2024, 2, 1),
            amount=0.50,
            received=True,
        )]
        points = build_timeline(events, "monthly", now=NOW)
        assert points[0].date == date(2024, 1, 1)
        for p in points:
            if p.date < date(2024, 2, 1):
                assert p.cumulative_paid == 0
            else:
                assert p.cumulative_paid == pytest.approx(0.50)
        assert date(2024, 2, 1) in _by_date(points)

    def test_cash_utilized_uses_share_multiplier(self):
        events = [DividendEvent(
            ticker="CASH",
            ex_date=date(2024, 1, 10),
            amount=1000.0,
            price=1000.0,
            received=True,
        )]
        points = build_timeline(events, TimeScale.DAILY, now=NOW)
        assert points[0].date == date(2024, 1, 10)
        assert all(p.cash_utilized == pytest.approx(100000.0) for p in points)

    def test_custom_share_multiplier(self):
        events = [DividendEvent(ticker="CASH", ex_date=date(2024, 1, 10), price=10.0)]
        points = build_timeline(events, "daily", now=NOW, share_multiplier=1)
        assert points[-1].cash_utilized == pytest.approx(10.0)


class TestAggregation:
    def test_empty_events(self):
        assert build_timeline([], "monthly", now=NOW) == []

    def test_first_event_after_window_is_empty(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2030, 1, 1), amount=1.0)]
        assert build_timeline(events, "daily", now=NOW) == []

    def test_monotonic_series(self, sample_events):
        for scale in TimeScale:
            points = build_timeline(sample_events, scale, now=NOW)
            assert points
            for prev, cur in zip(points, points[1:]):
                assert cur.date > prev.date
                assert cur.cash_utilized >= prev.cash_utilized
                assert cur.cumulative_paid >= prev.cumulative_paid
                assert cur.cumulative_projected >= prev.cumulative_projected
            for p in points:
                assert p.cumulative_projected >= p.cumulative_paid

    def test_no_amounts_means_zero_dividends(self):
        events = [
            DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 15), price=100.0, received=True),
            DividendEvent(ticker="MSFT", ex_date=date(2024, 3, 1)),
        ]
        points = build_timeline(events, "weekly", now=NOW)
        assert all(p.cumulative_paid == 0 for p in points)
        assert all(p.cumulative_projected == 0 for p in points)

    def test_projected_includes_pending(self, sample_events):
        points = _by_date(build_timeline(sample_events, "monthly", now=NOW))
        # JNJ 1.24 pays 2024-06-04, unreceived
        may = points[date(2024, 6, 1)]
        july = points[date(2024, 7, 1)]
        assert may.cumulative_projected == pytest.approx(may.cumulative_paid)
        assert july.cumulative_projected == pytest.approx(july.cumulative_paid + 1.24)

    def test_totals_are_not_double_counted(self):
        events = [DividendEvent(
            ticker="AAPL",
            ex_date=date(2024, 1, 1),
            amount=1.0,
            price=10.0,
            received=True,
        )]
        points = build_timeline(events, "monthly", now=NOW)
        assert points[-1].cumulative_paid == pytest.approx(1.0)
        assert points[-1].cash_utilized == pytest.approx(1000.0)

    def test_missing_pay_date_uses_ex_date(self):
        events = [DividendEvent(
            ticker="AAPL", ex_date=date(2024, 3, 5), amount=2.0, received=True,
        )]
        points = _by_date(build_timeline(events, "daily", now=NOW))
        assert points[date(2024, 3, 5)].cumulative_paid == pytest.approx(2.0)

    def test_point_events_exact_ex_date(self, sample_events):
        points = _by_date(build_timeline(sample_events, "daily", now=NOW))
        assert [e.ticker for e in points[date(2024, 1, 15)].events] == ["AAPL"]
        assert points[date(2024, 1, 16)].events == ()

    def test_input_order_irrelevant(self, sample_events):
        forward = build_timeline(sample_events, "monthly", now=NOW)
        backward = build_timeline(list(reversed(sample_events)), "monthly", now=NOW)
        assert [p.cumulative_paid for p in forward] == [p.cumulative_paid for p in backward]

    def test_unknown_scale(self, sample_events):
        with pytest.raises(DivTrackError) as exc_info:
            build_timeline(sample_events, "hourly", now=NOW)
        assert exc_info.value.code == ErrorCode.VALIDATION_FAILED


class TestDatetimeInputs:
    def test_datetime_now(self, sample_events):
        with_time = build_timeline(sample_events, "monthly", now=datetime(2024, 6, 15, 12))
        plain = build_timeline(sample_events, "monthly", now=NOW)
        assert with_time == plain

    def test_datetime_ex_date(self):
        events = [
            DividendEvent(
                ticker="AAPL",
                ex_date=datetime(2024, 1, 15, 9, 30),
                amount=0.5,
                received=True,
            ),
            DividendEvent(ticker="MSFT", ex_date=date(2024, 2, 14), amount=0.75, received=True),
        ]
        points = _by_date(build_timeline(events, "daily", now=NOW))
        first = min(points)
        assert first == date(2024, 1, 15)
        assert type(first) is date
        assert [e.ticker for e in points[date(2024, 1, 15)].events] == ["AAPL"]
        assert points[date(2024, 1, 15)].cumulative_paid == pytest.approx(0.5)
        assert points[date(2024, 2, 14)].cumulative_paid == pytest.approx(1.25)

    def test_datetime_pay_date(self):
        events = [DividendEvent(
            ticker="AAPL",
            ex_date=date(2024, 1, 15),
            pay_date=datetime(2024, 2, 1, 16, 0),
            amount=0.5,
            received=True,
        )]
        points = _by_date(build_timeline(events, "monthly", now=datetime(2024, 6, 15, 8)))
        assert points[date(2024, 1, 1)].cumulative_paid == 0
        assert points[date(2024, 2, 1)].cumulative_paid == pytest.approx(0.5)


class TestScales:
    def test_daily_ends_at_projection_window(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2024, 6, 1))]
        points = build_timeline(events, "daily", now=NOW)
        assert points[0].date == date(2024, 6, 1)
        assert points[-1].date == date(2025, 6, 15)

    def test_weekly_step(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2024, 6, 1))]
        points = build_timeline(events, "weekly", now=NOW)
        assert (points[1].date - points[0].date).days == 7

    def test_monthly_capped_at_24_points(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2020, 1, 1))]
        points = build_timeline(events, "monthly", now=NOW)
        assert len(points) == 24
        assert all(p.date.day == 1 for p in points)

    def test_quarterly_every_third_month(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2024, 1, 20))]
        points = build_timeline(events, "quarterly", now=NOW)
        assert [p.date for p in points[:3]] == [
            date(2024, 1, 1), date(2024, 4, 1), date(2024, 7, 1),
        ]

    def test_annual_points(self):
        events = [DividendEvent(ticker="AAPL", ex_date=date(2022, 3, 9))]
        points = build_timeline(events, "annually", now=NOW)
        assert [p.date for p in points] == [
            date(2022, 3, 1), date(2023, 3, 1), date(2024, 3, 1), date(2025, 3, 1),
        ]


class TestTimelineFrame:
    def test_frame_columns(self, sample_events):
        points = build_timeline(sample_events, "monthly", now=NOW)
        df = timeline_to_frame(points)
        assert list(df.columns) == [
            "date", "cash_utilized", "cumulative_paid",
            "cumulative_projected", "event_count",
        ]
        assert len(df) == len(points)
        assert df.iloc[0]["date"] == points[0].key

    def test_empty_frame(self):
        df = timeline_to_frame([])
        assert df.empty
