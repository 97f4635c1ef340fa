"""Unit tests for display formatting helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from netheal.cli.formatting import (
    format_bandwidth,
    format_bytes,
    format_duration,
    format_percent,
    format_relative_time,
    status_style,
)
from netheal.models import DeviceStatus


def test_status_style():
    assert status_style("DOWN") == "red"
    assert status_style(DeviceStatus.UP) == "green"
    assert status_style("whatever") == "dim"
    assert status_style(None) == "dim"


def test_format_percent():
    assert format_percent(42.123) == "42.1%"
    assert format_percent(None) == "N/A"


@pytest.mark.parametrize(
    ("ms", "expected"),
    [(None, "0ms"), (250, "250ms"), (5_000, "5s"), (125_000, "2m 5s"), (3_720_000, "1h 2m")],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected


def test_format_bytes():
    assert format_bytes(0) == "0 Bytes"
    assert format_bytes(1024) == "1 KB"
    assert format_bytes(1536) == "1.5 KB"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "N/A"), ("10 Gbps", "10 Gbps"), (10_000_000_000, "10.0 Gbps"), ("100000000", "100 Mbps"), (500, "500 bps")],
)
def test_format_bandwidth(raw, expected):
    assert format_bandwidth(raw) == expected


def test_format_relative_time():
    now = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)

    assert format_relative_time(None) == "N/A"
    assert format_relative_time(now - timedelta(seconds=30), now) == "30s ago"
    assert format_relative_time(now - timedelta(minutes=5), now) == "5m ago"
    assert format_relative_time(now - timedelta(hours=2, minutes=7), now) == "2h 07m ago"
    assert format_relative_time(now - timedelta(days=3), now) == "3d ago"
    assert format_relative_time(now + timedelta(seconds=5), now) == "just now"


def test_format_relative_time_naive_is_utc():
    now = datetime(2024, 1, 10, 12, 0, tzinfo=timezone.utc)

    assert format_relative_time(datetime(2024, 1, 10, 11, 0), now) == "1h 00m ago"
