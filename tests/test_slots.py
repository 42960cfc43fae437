"""提醒时刻计算测试。"""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest
from pydantic import ValidationError

from drink_water.reminders.models import ReminderSettings, ReminderWindow
from drink_water.reminders.slots import (
    as_utc,
    compute_daily_slots,
    compute_first_reminder_from_last_drink,
    window_end,
    window_start,
)

UTC = timezone.utc
DAY = date(2000, 1, 1)


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2000, 1, day, hour, minute, tzinfo=UTC)


def test_hourly_slots_include_both_window_edges() -> None:
    slots = compute_daily_slots(DAY, ReminderWindow(start_hour=7, end_hour=9), 60, UTC)
    assert slots == [at(7), at(8), at(9)]


def test_slots_start_at_window_start_when_interval_does_not_divide_span() -> None:
    slots = compute_daily_slots(DAY, ReminderWindow(start_hour=7, end_hour=9), 50, UTC)
    assert slots == [at(7), at(7, 50), at(8, 40)]


def test_slots_stay_inside_window_and_step_by_interval() -> None:
    window = ReminderWindow(start_hour=6, end_hour=22)
    for interval in (1, 7, 25, 45, 90, 180, 1000):
        slots = compute_daily_slots(DAY, window, interval, UTC)
        assert slots[0] == window_start(DAY, window, UTC)
        assert all(window_start(DAY, window, UTC) <= t <= window_end(DAY, window, UTC) for t in slots)
        assert all(b - a == timedelta(minutes=interval) for a, b in zip(slots, slots[1:]))


def test_once_per_day_is_window_start() -> None:
    assert compute_daily_slots(DAY, ReminderWindow(start_hour=7, end_hour=9), 0, UTC) == [at(7)]


def test_single_hour_window() -> None:
    assert compute_daily_slots(DAY, ReminderWindow(start_hour=8, end_hour=8), 30, UTC) == [at(8)]


def test_inverted_window_has_no_slots() -> None:
    window = ReminderWindow(start_hour=9, end_hour=7)
    assert not window.is_valid
    assert compute_daily_slots(DAY, window, 60, UTC) == []
    assert compute_daily_slots(DAY, window, 0, UTC) == []


def test_negative_interval_has_no_slots() -> None:
    assert compute_daily_slots(DAY, ReminderWindow(start_hour=7, end_hour=9), -5, UTC) == []


def test_window_hours_follow_the_given_timezone() -> None:
    tz = timezone(timedelta(hours=8))
    slots = compute_daily_slots(DAY, ReminderWindow(start_hour=7, end_hour=8), 60, tz)
    assert [t.hour for t in slots] == [7, 8]
    assert slots[0] == datetime(1999, 12, 31, 23, 0, tzinfo=UTC)


def test_slots_across_dst_gap_are_evenly_spaced() -> None:
    try:
        tz = ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("时区数据不可用")
    # 2024-03-10 凌晨 2 点跳到 3 点
    slots = compute_daily_slots(date(2024, 3, 10), ReminderWindow(start_hour=0, end_hour=4), 60, tz)
    assert [t.hour for t in slots] == [0, 1, 3, 4]
    assert all(as_utc(b) - as_utc(a) == timedelta(hours=1) for a, b in zip(slots, slots[1:]))


def test_slots_across_dst_fall_back_repeat_the_hour() -> None:
    try:
        tz = ZoneInfo("America/New_York")
    except ZoneInfoNotFoundError:
        pytest.skip("时区数据不可用")
    # 2024-11-03 凌晨 2 点回到 1 点，1 点出现两次
    slots = compute_daily_slots(date(2024, 11, 3), ReminderWindow(start_hour=0, end_hour=3), 60, tz)
    assert [t.hour for t in slots] == [0, 1, 1, 2, 3]
    assert [as_utc(t).hour for t in slots] == [4, 5, 6, 7, 8]
    assert all(as_utc(b) - as_utc(a) == timedelta(hours=1) for a, b in zip(slots, slots[1:]))


def test_first_reminder_inside_window_is_last_drink_plus_interval() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    assert compute_first_reminder_from_last_drink(at(10, 15), 60, window, DAY, UTC) == at(11, 15)


def test_first_reminder_before_window_clamps_to_start() -> None:
    window = ReminderWindow(start_hour=7, end_hour=9)
    assert compute_first_reminder_from_last_drink(at(5, 45), 60, window, DAY, UTC) == at(7)


def test_first_reminder_after_window_is_none() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    assert compute_first_reminder_from_last_drink(at(20, 30), 60, window, DAY, UTC) is None


def test_first_reminder_from_previous_day_clamps_to_today_start() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    last = datetime(1999, 12, 31, 20, 30, tzinfo=UTC)
    assert compute_first_reminder_from_last_drink(last, 60, window, DAY, UTC) == at(7)


def test_once_per_day_keeps_last_drink_time_of_day() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    assert compute_first_reminder_from_last_drink(at(8, 15), 0, window, DAY, UTC) == at(8, 15, day=2)


def test_once_per_day_before_window_snaps_to_start() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    assert compute_first_reminder_from_last_drink(at(5), 0, window, DAY, UTC) == at(7, day=2)


def test_once_per_day_after_window_rolls_to_next_start() -> None:
    window = ReminderWindow(start_hour=7, end_hour=21)
    assert compute_first_reminder_from_last_drink(at(22, 30), 0, window, DAY, UTC) == at(7, day=3)


def test_first_reminder_invalid_inputs() -> None:
    assert compute_first_reminder_from_last_drink(at(8), -1, ReminderWindow(start_hour=7, end_hour=9), DAY, UTC) is None
    assert compute_first_reminder_from_last_drink(at(8), 60, ReminderWindow(start_hour=9, end_hour=7), DAY, UTC) is None


def test_hours_outside_day_are_rejected() -> None:
    with pytest.raises(ValidationError):
        ReminderWindow(start_hour=24, end_hour=23)
    with pytest.raises(ValidationError):
        ReminderWindow(start_hour=7, end_hour=-1)
    with pytest.raises(ValidationError):
        ReminderSettings(start_hour=-1)
    with pytest.raises(ValidationError):
        ReminderSettings(end_hour=24)
    assert ReminderWindow(start_hour=0, end_hour=23).is_valid
