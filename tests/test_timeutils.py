"""时间工具单元测试

测试内容：
1. 经过时间向下取整（含负数）
2. 周 / 月窗口边界
3. 格式化
"""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from responscore.core.timeutils import (
    elapsed_days,
    elapsed_hours,
    elapsed_minutes,
    as_utc,
    format_datetime,
    month_end,
    month_start,
    now_utc,
    previous_week_end,
    previous_week_start,
    week_end,
    week_start,
)

BASE = datetime(2025, 11, 19, 9, 0, tzinfo=UTC)  # 周三


class TestElapsed:
    @pytest.mark.parametrize(
        "delta,expected",
        [
            (timedelta(0), 0),
            (timedelta(seconds=59), 0),
            (timedelta(minutes=1), 1),
            (timedelta(minutes=3, seconds=30), 3),
            (timedelta(hours=2), 120),
            (timedelta(seconds=-30), -1),
        ],
    )
    def test_elapsed_minutes_floors(self, delta: timedelta, expected: int):
        assert elapsed_minutes(BASE, BASE + delta) == expected

    def test_elapsed_hours_and_days(self):
        assert elapsed_hours(BASE, BASE + timedelta(minutes=179)) == 2
        assert elapsed_days(BASE, BASE + timedelta(hours=47)) == 1
        assert elapsed_days(BASE, BASE - timedelta(hours=1)) == -1

    def test_now_utc_is_aware(self):
        assert now_utc().tzinfo is not None

    def test_as_utc(self):
        assert as_utc(datetime(2025, 11, 19, 9, 0)) == BASE
        shifted = datetime(2025, 11, 19, 18, 0, tzinfo=timezone(timedelta(hours=9)))
        assert as_utc(shifted) == BASE
        assert as_utc(shifted).tzinfo is UTC


class TestCalendarWindows:
    def test_week_bounds(self):
        assert week_start(BASE) == datetime(2025, 11, 17, tzinfo=UTC)
        assert week_end(BASE) == datetime(2025, 11, 23, 23, 59, 59, 999999, tzinfo=UTC)

    def test_week_start_on_sunday_goes_back_to_monday(self):
        sunday = datetime(2025, 11, 23, 18, 0, tzinfo=UTC)
        assert week_start(sunday) == datetime(2025, 11, 17, tzinfo=UTC)

    def test_previous_week(self):
        assert previous_week_start(BASE) == datetime(2025, 11, 10, tzinfo=UTC)
        assert previous_week_end(BASE).date() == datetime(2025, 11, 16).date()

    def test_month_bounds(self):
        assert month_start(BASE) == datetime(2025, 11, 1, tzinfo=UTC)
        assert month_end(BASE).day == 30
        assert month_end(datetime(2024, 2, 10, tzinfo=UTC)).day == 29
        assert month_end(datetime(2025, 12, 31, 23, 0, tzinfo=UTC)).day == 31


class TestFormat:
    def test_default_format(self):
        assert format_datetime(BASE) == "2025-11-19 09:00"

    def test_custom_format(self):
        value = datetime(2025, 1, 2, 3, 4, 5, tzinfo=UTC)
        assert format_datetime(value, "DD/MM/YYYY HH:mm:ss") == "02/01/2025 03:04:05"
