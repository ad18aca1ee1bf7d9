"""Reporting-cycle boundaries in East Africa Time (fixed UTC+3, no DST).

A cycle starts at the local 15:31 boundary of one day and ends two minutes
before the next day's boundary, leaving a dead zone that belongs to no cycle.
"""

from datetime import UTC, date, datetime, time, timedelta, timezone

from daily_summary.domain.report import ReportingWindow

LOCAL_UTC_OFFSET = timedelta(hours=3)
LOCAL_TZ = timezone(LOCAL_UTC_OFFSET, "EAT")

CYCLE_BOUNDARY = time(15, 31)
DEAD_ZONE = timedelta(minutes=2)


def cycle_boundary(day: date) -> datetime:
    """Return the absolute (UTC) instant of the boundary on local ``day``."""
    return datetime.combine(day, CYCLE_BOUNDARY, tzinfo=LOCAL_TZ).astimezone(UTC)


def compute_reporting_window(now: datetime) -> ReportingWindow:
    """Return the window of the cycle in progress or most recently started.

    ``now`` is treated as UTC when it carries no tzinfo.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    today = now.astimezone(LOCAL_TZ).date()
    boundary = cycle_boundary(today)

    if now < boundary:
        start = cycle_boundary(today - timedelta(days=1))
        end = boundary - DEAD_ZONE
    else:
        start = boundary
        end = cycle_boundary(today + timedelta(days=1)) - DEAD_ZONE

    return ReportingWindow(start=start, end=end, utc_offset=LOCAL_UTC_OFFSET)
