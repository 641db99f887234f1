from datetime import datetime, timedelta

from roximity.services.attendance_types import PresenceInterval
from roximity.services.presence_intervals import (
    DEFAULT_GAP_THRESHOLD,
    clip_intervals,
    merge_timestamps,
    total_duration,
)

T0 = datetime(2025, 3, 10, 9, 0, 0)
FIVE_MIN = timedelta(minutes=5)


def test_empty_input_yields_no_intervals():
    assert merge_timestamps([], FIVE_MIN) == []
    assert total_duration([]) == timedelta(0)


def test_single_sighting_is_zero_length_interval():
    intervals = merge_timestamps([T0], FIVE_MIN)
    assert intervals == [PresenceInterval(T0, T0)]
    assert total_duration(intervals) == timedelta(0)


def test_gap_equal_to_threshold_merges():
    intervals = merge_timestamps([T0, T0 + FIVE_MIN], FIVE_MIN)
    assert intervals == [PresenceInterval(T0, T0 + FIVE_MIN)]


def test_gap_over_threshold_splits():
    later = T0 + FIVE_MIN + timedelta(seconds=1)
    intervals = merge_timestamps([T0, later], FIVE_MIN)
    assert intervals == [PresenceInterval(T0, T0), PresenceInterval(later, later)]


def test_default_gap_threshold_is_five_minutes():
    assert DEFAULT_GAP_THRESHOLD == FIVE_MIN
    assert len(merge_timestamps([T0, T0 + FIVE_MIN])) == 1


def test_several_blocks():
    stamps = [
        T0,
        T0 + timedelta(minutes=2),
        T0 + timedelta(minutes=4),
        # 10 min de silêncio
        T0 + timedelta(minutes=14),
        T0 + timedelta(minutes=15),
        T0 + timedelta(minutes=30),
    ]
    intervals = merge_timestamps(stamps, FIVE_MIN)
    assert intervals == [
        PresenceInterval(T0, T0 + timedelta(minutes=4)),
        PresenceInterval(T0 + timedelta(minutes=14), T0 + timedelta(minutes=15)),
        PresenceInterval(T0 + timedelta(minutes=30), T0 + timedelta(minutes=30)),
    ]
    assert total_duration(intervals) == timedelta(minutes=5)


def test_duplicate_timestamps_do_not_split():
    intervals = merge_timestamps([T0, T0, T0 + timedelta(minutes=1)], FIVE_MIN)
    assert intervals == [PresenceInterval(T0, T0 + timedelta(minutes=1))]


def test_merging_interval_endpoints_again_is_stable():
    stamps = [T0 + timedelta(minutes=m) for m in (0, 3, 6, 20, 22)]
    intervals = merge_timestamps(stamps, FIVE_MIN)

    endpoints = [t for interval in intervals for t in (interval.start, interval.end)]
    assert merge_timestamps(sorted(stamps + endpoints), FIVE_MIN) == intervals

    # blocos curtos são reconstruídos só com as duas pontas
    short = [i for i in intervals if i.duration <= FIVE_MIN]
    assert short
    for interval in short:
        assert merge_timestamps([interval.start, interval.end], FIVE_MIN) == [interval]


def test_merge_is_deterministic():
    stamps = [T0 + timedelta(seconds=s) for s in range(0, 3600, 90)]
    assert merge_timestamps(stamps, FIVE_MIN) == merge_timestamps(list(stamps), FIVE_MIN)


def test_clip_trims_and_drops():
    start = T0
    end = T0 + timedelta(hours=1)
    intervals = [
        PresenceInterval(T0 - timedelta(minutes=30), T0 - timedelta(minutes=10)),
        PresenceInterval(T0 - timedelta(minutes=5), T0 + timedelta(minutes=10)),
        PresenceInterval(T0 + timedelta(minutes=55), T0 + timedelta(minutes=70)),
    ]
    clipped = clip_intervals(intervals, start, end)
    assert clipped == [
        PresenceInterval(T0, T0 + timedelta(minutes=10)),
        PresenceInterval(T0 + timedelta(minutes=55), end),
    ]
    assert total_duration(clipped) == timedelta(minutes=15)
