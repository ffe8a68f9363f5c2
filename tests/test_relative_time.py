from datetime import datetime, timedelta

import pytest

from scoutboard.services.relative_time import EPOCH, format_relative_time, parse_relative_time

NOW = datetime(2026, 10, 19, 12, 0, 0)


@pytest.mark.parametrize("delta, expected", [
    (timedelta(minutes=10), "1時間前"),
    (timedelta(hours=5), "5時間前"),
    (timedelta(hours=23, minutes=59), "23時間前"),
    (timedelta(days=1), "1日前"),
    (timedelta(days=6, hours=3), "6日前"),
    (timedelta(days=7), "1週間前"),
    (timedelta(days=13), "1週間前"),
    (timedelta(days=14), "2週間前"),
    (timedelta(days=29), "4週間前"),
])
def test_format_relative_time(delta, expected):
    assert format_relative_time(NOW - delta, NOW) == expected


def test_format_old_login_as_date():
    assert format_relative_time(datetime(2026, 8, 3, 9, 0), NOW) == "2026年8月3日"


def test_format_never_logged_in():
    assert format_relative_time(None, NOW) == "未ログイン"


def test_parse_relative_labels():
    assert parse_relative_time("3時間前", NOW) == NOW - timedelta(hours=3)
    assert parse_relative_time("3日前", NOW) == NOW - timedelta(days=3)
    assert parse_relative_time("2週間前", NOW) == NOW - timedelta(days=14)
    assert parse_relative_time("2026年8月3日", NOW) == datetime(2026, 8, 3)


@pytest.mark.parametrize("text", ["未ログイン", "1時間以内", "", None, "昨日", "2026年13月40日"])
def test_parse_unrecognised_falls_back_to_epoch(text):
    assert parse_relative_time(text, NOW) == EPOCH


def test_formatter_output_is_parseable():
    for days in range(0, 60):
        label = format_relative_time(NOW - timedelta(days=days, hours=1), NOW)
        assert parse_relative_time(label, NOW) != EPOCH, label
