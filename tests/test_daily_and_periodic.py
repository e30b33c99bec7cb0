"""Tests for engine/daily.py and engine/periodic.py — calendar-bounded aggregates."""
from datetime import datetime, timedelta, timezone

from fleet_monitor.config import CHART_PALETTE
from fleet_monitor.engine.daily import daily_summary
from fleet_monitor.engine.periodic import month_periods, monthly_trend, periodic_trends, week_periods, weekly_trend


class TestDailySummary:

    def test_counts_completed_jobs_per_backend(self, make_job, now):
        jobs = [
            make_job(status="COMPLETED", backend="ibm_brisbane", minutes_ago=30),
            make_job(status="COMPLETED", backend="ibm_kyoto", minutes_ago=60),
            make_job(status="COMPLETED", backend="ibm_brisbane", minutes_ago=120),
            make_job(status="ERROR", backend="ibm_osaka", minutes_ago=10),
            make_job(status="COMPLETED", backend="ibm_osaka", minutes_ago=13 * 60),  # yesterday
        ]
        summary = daily_summary(jobs, now)
        assert summary.date == "2024-05-15T00:00:00+00:00"
        assert summary.total_completed == 3
        assert [(e.name, e.value) for e in summary.completed_by_backend] == [
            ("ibm_brisbane", 2),
            ("ibm_kyoto", 1),
        ]
        assert [e.fill for e in summary.completed_by_backend] == CHART_PALETTE[:2]

    def test_no_jobs_today(self, make_job, now):
        summary = daily_summary([make_job(minutes_ago=3 * 24 * 60)], now)
        assert summary.total_completed == 0
        assert summary.completed_by_backend == []

    def test_palette_wraps(self, make_job, now):
        jobs = [make_job(backend=f"backend_{i}", minutes_ago=5) for i in range(len(CHART_PALETTE) + 1)]
        entries = daily_summary(jobs, now).completed_by_backend
        assert entries[-1].fill == CHART_PALETTE[0]

    def test_day_boundary_follows_timezone(self, make_job, now):
        # 23:00 UTC on the 14th is already the 15th in Tokyo.
        late_yesterday = make_job(submitted=datetime(2024, 5, 14, 23, 0, tzinfo=timezone.utc))
        assert daily_summary([late_yesterday], now).total_completed == 0
        tokyo = daily_summary([late_yesterday], now, tz="Asia/Tokyo")
        assert tokyo.total_completed == 1
        assert tokyo.date == "2024-05-15T00:00:00+09:00"


class TestPeriods:

    def test_week_periods_are_iso_weeks(self, now):
        periods = week_periods(now)
        assert len(periods) == 4
        assert periods[-1][0] == datetime(2024, 5, 13, tzinfo=timezone.utc)
        assert periods[0][0] == datetime(2024, 4, 22, tzinfo=timezone.utc)
        for start, end in periods:
            assert start.weekday() == 0
            assert end - start == timedelta(weeks=1)

    def test_month_periods_cross_year(self, now):
        periods = month_periods(now)
        assert len(periods) == 6
        assert periods[0][0].replace(tzinfo=None) == datetime(2023, 12, 1)
        assert periods[-1][1].replace(tzinfo=None) == datetime(2024, 6, 1)
        for (_, end), (start, _) in zip(periods, periods[1:]):
            assert end == start


class TestTrends:

    def test_weekly_labels_and_counts(self, make_job, now):
        jobs = [
            make_job(status="COMPLETED", submitted=datetime(2024, 5, 13, 0, 0, tzinfo=timezone.utc)),
            make_job(status="ERROR", submitted=datetime(2024, 5, 12, 23, 59, tzinfo=timezone.utc)),
            make_job(status="CANCELLED", submitted=datetime(2024, 5, 14, tzinfo=timezone.utc)),
        ]
        weekly = weekly_trend(jobs, now)
        assert [p.date for p in weekly] == ["Apr 22", "Apr 29", "May 6", "May 13"]
        assert weekly[-1].completed == 1
        assert weekly[-1].total == 1
        assert weekly[-2].error == 1

    def test_monthly_labels_and_counts(self, make_job, now):
        jobs = [
            make_job(status="RUNNING", submitted=datetime(2024, 1, 15, tzinfo=timezone.utc)),
            make_job(status="QUEUED", submitted=datetime(2023, 11, 30, tzinfo=timezone.utc)),
        ]
        monthly = monthly_trend(jobs, now)
        assert [p.date for p in monthly] == ["Dec", "Jan", "Feb", "Mar", "Apr", "May"]
        assert monthly[1].running == 1
        assert sum(p.total for p in monthly) == 1

    def test_trends_ignore_the_trailing_window(self, make_job, now):
        old = make_job(status="COMPLETED", minutes_ago=20 * 24 * 60)
        report = periodic_trends([old], now)
        assert report.weekly == weekly_trend([old], now)
        assert report.monthly == monthly_trend([old], now)
        assert sum(p.completed for p in report.weekly) == 1
        assert sum(p.completed for p in report.monthly) == 1

    def test_serialised_keys(self, now):
        dumped = periodic_trends([], now).model_dump(by_alias=True)
        assert set(dumped) == {"weekly", "monthly"}
        assert set(dumped["weekly"][0]) == {"date", "COMPLETED", "RUNNING", "QUEUED", "ERROR"}
