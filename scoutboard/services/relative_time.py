"""Relative last-login labels ("3日前", "2週間前", ...) and their inverse.

Search results filter and sort on the rendered label rather than the raw
timestamp, so the parser below has to accept everything the formatter emits.
Strings it does not recognise (including "未ログイン" and "1時間以内")
resolve to the epoch and therefore sort last.
"""
import re
from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1)
NEVER_LOGGED_IN = "未ログイン"

_HOURS = re.compile(r"^(\d+)時間前$")
_DAYS = re.compile(r"^(\d+)日前$")
_WEEKS = re.compile(r"^(\d+)週間前$")
_DATE = re.compile(r"^(\d{4})年(\d{1,2})月(\d{1,2})日$")


def utcnow() -> datetime:
    """Naive UTC now, matching how timestamps are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_relative_time(dt, now=None) -> str:
    if dt is None:
        return NEVER_LOGGED_IN
    now = now or utcnow()
    diff = now - dt
    hours = int(diff.total_seconds() // 3600)
    days = diff.days

    if hours < 24:
        return "1時間前" if hours <= 0 else f"{hours}時間前"
    if 1 <= days <= 6:
        return f"{days}日前"
    if 7 <= days <= 13:
        return "1週間前"
    if 14 <= days <= 29:
        return f"{days // 7}週間前"
    return f"{dt.year}年{dt.month}月{dt.day}日"


def parse_relative_time(text, now=None) -> datetime:
    if not text:
        return EPOCH
    now = now or utcnow()
    text = text.strip()

    m = _HOURS.match(text)
    if m:
        return now - timedelta(hours=int(m.group(1)))
    m = _DAYS.match(text)
    if m:
        return now - timedelta(days=int(m.group(1)))
    m = _WEEKS.match(text)
    if m:
        return now - timedelta(days=7 * int(m.group(1)))
    m = _DATE.match(text)
    if m:
        try:
            return datetime(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        except ValueError:
            return EPOCH
    return EPOCH
