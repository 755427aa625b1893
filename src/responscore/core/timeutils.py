"""时间工具 -- 时间戳与经过时长之间的纯函数转换

所有差值均向下取整（floor），end 早于 start 时结果为负数。
"""

from datetime import UTC, datetime, time, timedelta


def now_utc() -> datetime:
    """当前 UTC 时间（默认时钟）"""
    return datetime.now(UTC)


def as_utc(d: datetime) -> datetime:
    """统一为带时区的 UTC 时间；无时区信息的值按 UTC 解释"""
    if d.tzinfo is None:
        return d.replace(tzinfo=UTC)
    return d.astimezone(UTC)


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """start 到 end 的经过分钟数（向下取整）"""
    return (end - start) // timedelta(minutes=1)


def elapsed_hours(start: datetime, end: datetime) -> int:
    """start 到 end 的经过小时数（向下取整）"""
    return (end - start) // timedelta(hours=1)


def elapsed_days(start: datetime, end: datetime) -> int:
    """start 到 end 的经过天数（向下取整）"""
    return (end - start) // timedelta(days=1)


def week_start(d: datetime) -> datetime:
    """d 所在周的周一 00:00"""
    monday = d.date() - timedelta(days=d.weekday())
    return datetime.combine(monday, time.min, tzinfo=d.tzinfo)


def week_end(d: datetime) -> datetime:
    """d 所在周的周日 23:59:59.999999"""
    sunday = d.date() + timedelta(days=6 - d.weekday())
    return datetime.combine(sunday, time.max, tzinfo=d.tzinfo)


def previous_week_start(d: datetime) -> datetime:
    return week_start(d - timedelta(days=7))


def previous_week_end(d: datetime) -> datetime:
    return week_end(d - timedelta(days=7))


def month_start(d: datetime) -> datetime:
    """d 所在月的 1 日 00:00"""
    return datetime.combine(d.date().replace(day=1), time.min, tzinfo=d.tzinfo)


def month_end(d: datetime) -> datetime:
    """d 所在月最后一天 23:59:59.999999"""
    first_of_next = (d.date().replace(day=28) + timedelta(days=4)).replace(day=1)
    last_day = first_of_next - timedelta(days=1)
    return datetime.combine(last_day, time.max, tzinfo=d.tzinfo)


def format_datetime(d: datetime, fmt: str = "YYYY-MM-DD HH:mm") -> str:
    """按 YYYY/MM/DD/HH/mm/ss 占位符格式化时间"""
    return (
        fmt.replace("YYYY", f"{d.year:04d}")
        .replace("MM", f"{d.month:02d}")
        .replace("DD", f"{d.day:02d}")
        .replace("HH", f"{d.hour:02d}")
        .replace("mm", f"{d.minute:02d}")
        .replace("ss", f"{d.second:02d}")
    )
