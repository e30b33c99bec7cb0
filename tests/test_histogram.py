"""Tests for engine/histogram.py — trailing-window status buckets."""
from datetime import timedelta

import pytest

from fleet_monitor.engine.histogram import bucketize


def test_empty_input_gives_zero_filled_buckets(now):
    buckets = bucketize([], now)
    assert len(buckets) == 12
    assert all(b.total == 0 for b in buckets)
    assert buckets[0].time == "00:00"
    assert buckets[-1].time == "11:00"


def test_jobs_land_in_their_bucket(make_job, now):
    jobs = [
        make_job(status="COMPLETED", minutes_ago=30),
        make_job(status="ERROR", minutes_ago=45),
        make_job(status="RUNNING", minutes_ago=90),
        make_job(status="QUEUED", minutes_ago=11 * 60 + 59),
    ]
    buckets = bucketize(jobs, now)
    assert buckets[-1].completed == 1
    assert buckets[-1].error == 1
    assert buckets[-2].running == 1
    assert buckets[0].queued == 1


def test_bucket_edges_are_half_open(make_job, now):
    at_start = make_job(submitted=now - timedelta(hours=12))
    at_now = make_job(submitted=now)
    on_inner_edge = make_job(submitted=now - timedelta(hours=1))
    buckets = bucketize([at_start, at_now, on_inner_edge], now)
    assert buckets[0].completed == 1
    assert buckets[-1].completed == 1
    assert sum(b.total for b in buckets) == 2


def test_out_of_range_jobs_are_dropped(make_job, now):
    jobs = [make_job(minutes_ago=13 * 60), make_job(submitted=now + timedelta(minutes=5))]
    assert sum(b.total for b in bucketize(jobs, now)) == 0


def test_statuses_outside_chart_are_ignored(make_job, now):
    jobs = [make_job(status="CANCELLED"), make_job(status="UNKNOWN"), make_job(status="COMPLETED")]
    assert sum(b.total for b in bucketize(jobs, now)) == 1


def test_total_matches_chart_status_jobs(make_job, now):
    statuses = ["COMPLETED", "RUNNING", "QUEUED", "ERROR"]
    jobs = [make_job(status=statuses[i % 4], minutes_ago=i * 17) for i in range(40)]
    in_range = [j for j in jobs if now - timedelta(hours=12) <= j.submitted < now]
    assert sum(b.total for b in bucketize(jobs, now)) == len(in_range)


def test_labels_follow_report_timezone(now):
    buckets = bucketize([], now, tz="America/New_York")
    # 00:00 UTC is 20:00 EDT on the previous day.
    assert buckets[0].time == "20:00"
    assert buckets[-1].time == "07:00"


def test_custom_geometry(make_job, now):
    buckets = bucketize([make_job(minutes_ago=10)], now, bucket_count=4, bucket_width=timedelta(minutes=15))
    assert [b.time for b in buckets] == ["11:00", "11:15", "11:30", "11:45"]
    assert buckets[-1].completed == 1


@pytest.mark.parametrize("count,width", [(0, timedelta(hours=1)), (12, timedelta(0))])
def test_invalid_geometry(now, count, width):
    with pytest.raises(ValueError):
        bucketize([], now, bucket_count=count, bucket_width=width)


def test_serialised_keys(make_job, now):
    dumped = bucketize([make_job()], now)[-1].model_dump(by_alias=True)
    assert set(dumped) == {"time", "COMPLETED", "RUNNING", "QUEUED", "ERROR"}
