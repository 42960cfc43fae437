"""提醒时间计算：时间窗边界、每日提醒时刻、由上次喝水推算的首个提醒。

全部为纯函数，时区（日历）由调用方传入。时间窗按每个自然日的整点换算，
提醒之间的间隔按绝对时间累加（经 UTC 换算），夏令时切换不会跳过或重复提醒。
"""
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import List, Optional

from drink_water.config import ONCE_PER_DAY
from drink_water.reminders.models import ReminderWindow

ONE_DAY = timedelta(hours=24)


def local_day(instant: datetime, tz: tzinfo) -> date:
    """某时刻在给定时区下所属的日期。"""
    return instant.astimezone(tz).date()


def at_hour(day: date, hour: int, tz: tzinfo) -> datetime:
    """给定日期在时区内的整点时刻。"""
    local = datetime.combine(day, time(hour=hour), tzinfo=tz)
    # 夏令时跳过的整点经 UTC 往返后落到真实存在的时刻
    return local.astimezone(timezone.utc).astimezone(tz)


def window_start(day: date, window: ReminderWindow, tz: tzinfo) -> datetime:
    return at_hour(day, window.start_hour, tz)


def window_end(day: date, window: ReminderWindow, tz: tzinfo) -> datetime:
    return at_hour(day, window.end_hour, tz)


def as_utc(instant: datetime) -> datetime:
    """比较先换成 UTC：同一 ZoneInfo 的两个时刻直接比较会忽略 fold。"""
    return instant.astimezone(timezone.utc)


def add_minutes(instant: datetime, minutes: int, tz: tzinfo) -> datetime:
    """按绝对时间加分钟，结果换回时区本地表示。"""
    return (instant.astimezone(timezone.utc) + timedelta(minutes=minutes)).astimezone(tz)


def slots_from(first: datetime, end: datetime, interval_minutes: int, tz: tzinfo) -> List[datetime]:
    """从 first 开始每隔 interval_minutes 一个时刻，直到不超过 end 的最后一个。"""
    if interval_minutes <= 0:
        return [first] if as_utc(first) <= as_utc(end) else []
    times = []
    t = first.astimezone(tz)
    while as_utc(t) <= as_utc(end):
        times.append(t)
        t = add_minutes(t, interval_minutes, tz)
    return times


def compute_daily_slots(day: date, window: ReminderWindow, interval_minutes: int, tz: tzinfo) -> List[datetime]:
    """
    计算某天时间窗内的全部提醒时刻。
    每天一次：只有开始整点；按间隔：start, start+Δ, ... 直到 <= 结束整点。
    时间窗无效或间隔为负时返回空列表。
    """
    if interval_minutes < 0 or not window.is_valid:
        return []
    start = window_start(day, window, tz)
    end = window_end(day, window, tz)
    if as_utc(start) > as_utc(end):
        return []
    if interval_minutes == ONCE_PER_DAY:
        return [start]
    return slots_from(start, end, interval_minutes, tz)


def compute_first_reminder_from_last_drink(
    last_drink: datetime,
    interval_minutes: int,
    window: ReminderWindow,
    reference_day: date,
    tz: tzinfo,
) -> Optional[datetime]:
    """
    由上次喝水时间推算第一个提醒（锚点）。
    按间隔：上次喝水 + 间隔，夹到 reference_day 的时间窗内；早于开始取开始，晚于结束则无锚点。
    每天一次：上次喝水 + 24 小时，对齐到其所在日的时间窗；早于开始取当天开始，
    晚于结束顺延到次日开始，否则保留原时刻（提醒与上次喝水同一钟点）。
    """
    if interval_minutes < 0 or not window.is_valid:
        return None

    if interval_minutes == ONCE_PER_DAY:
        candidate = (last_drink.astimezone(timezone.utc) + ONE_DAY).astimezone(tz)
        day = local_day(candidate, tz)
        start = window_start(day, window, tz)
        if as_utc(candidate) < as_utc(start):
            return start
        if as_utc(candidate) > as_utc(window_end(day, window, tz)):
            return window_start(day + timedelta(days=1), window, tz)
        return candidate

    candidate = add_minutes(last_drink, interval_minutes, tz)
    start = window_start(reference_day, window, tz)
    end = window_end(reference_day, window, tz)
    if as_utc(start) > as_utc(end):
        return None
    if as_utc(candidate) < as_utc(start):
        return start
    if as_utc(candidate) > as_utc(end):
        return None
    return candidate
