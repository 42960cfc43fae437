"""应用控制测试：启动、喝水、达成目标、修改设置。"""
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from drink_water.app.controller import HydrationController
from drink_water.intake.models import WaterIntake
from drink_water.intake.tracker import IntakeTracker
from drink_water.reminders.models import ReminderSettings
from drink_water.reminders.scheduler import ReminderScheduler
from drink_water.reminders.sink import InMemoryNotificationSink
from drink_water.reminders.sounds import SoundResolver

UTC = timezone.utc


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2000, 1, day, hour, minute, tzinfo=UTC)


def make_controller(now: datetime, goal: int = 30, interval: int = 60):
    clock = FakeClock(now)
    sink = InMemoryNotificationSink()
    resolver = SoundResolver(base_dir=Path(tempfile.gettempdir()) / "drink-water-no-sounds")
    scheduler = ReminderScheduler(sink, clock=clock, tz=UTC, sound_resolver=resolver)
    tracker = IntakeTracker(intake=WaterIntake(daily_goal_oz=goal), clock=clock, tz=UTC)
    settings = ReminderSettings(start_hour=7, end_hour=21, interval_minutes=interval)
    return HydrationController(scheduler, tracker, settings), sink, clock


def test_launch_requests_permission_once_and_schedules() -> None:
    controller, sink, _ = make_controller(at(7, 30))
    plan = controller.on_launch()
    assert sink.permission_requested
    assert controller.permission_granted
    assert plan.today_times[0] == at(8)
    assert len(plan.tomorrow_times) == 15
    sink.permission_requested = False
    controller.on_launch()
    assert sink.permission_requested is False


def test_drink_reschedules_from_now() -> None:
    controller, sink, _ = make_controller(at(10, 20))
    controller.on_launch()
    assert controller.log_drink() == (10, False)
    today = [r.fire_at for r in sink.pending() if r.identifier.startswith("today_")]
    assert today[0] == at(11, 20)
    assert sink.clear_count == 2


def test_reaching_goal_leaves_only_tomorrow() -> None:
    controller, sink, _ = make_controller(at(10), goal=20)
    controller.on_launch()
    controller.log_drink()
    assert controller.log_drink() == (20, True)
    assert sink.identifiers("today_") == []
    assert len(sink.identifiers("tomorrow_")) == 15
    clears = sink.clear_count
    assert controller.log_drink() is None
    assert sink.clear_count == clears


def test_launch_after_goal_met_schedules_tomorrow_only() -> None:
    controller, sink, _ = make_controller(at(10), goal=10)
    controller.log_drink()
    controller.on_launch()
    assert sink.identifiers("today_") == []


def test_launch_on_new_day_resets_and_schedules_today() -> None:
    controller, sink, clock = make_controller(at(10), goal=10)
    controller.log_drink()
    clock.now = at(6, day=2)
    plan = controller.on_launch()
    assert controller.tracker.intake.intake_oz == 0
    assert plan.today_times[0] == at(7, day=2)


def test_apply_settings_uses_now_as_baseline() -> None:
    controller, _, _ = make_controller(at(10, 5))
    plan = controller.apply_settings(ReminderSettings(start_hour=7, end_hour=21, interval_minutes=30))
    assert controller.settings.interval_minutes == 30
    assert plan.today_times[0] == at(10, 35)
    assert plan.today_times[1] - plan.today_times[0] == timedelta(minutes=30)


def test_reset_today_restores_today_reminders() -> None:
    controller, sink, _ = make_controller(at(10), goal=10)
    controller.log_drink()
    assert sink.identifiers("today_") == []
    plan = controller.reset_today()
    assert plan.today_times[0] == at(11)
    assert sink.identifiers("today_")


def test_reset_today_anchors_from_now() -> None:
    controller, _, _ = make_controller(at(10, 20))
    controller.log_drink()
    plan = controller.reset_today()
    # 以清零时刻为基准，而不是按自然整点
    assert plan.today_times[0] == at(11, 20)
    assert controller.tracker.intake.intake_oz == 0


def test_update_settings_changes_window_and_reschedules() -> None:
    controller, sink, _ = make_controller(at(10, 5))
    plan = controller.update_settings(start_hour=12)
    assert controller.settings.start_hour == 12
    assert controller.settings.interval_minutes == 60
    assert plan.today_times[0] == at(12)
    assert plan.tomorrow_times[0] == at(12, day=2)
    clears = sink.clear_count
    with pytest.raises(ValidationError):
        controller.update_settings(end_hour=24)
    assert controller.settings.end_hour == 21
    assert sink.clear_count == clears


def test_update_settings_sound_name() -> None:
    controller, _, _ = make_controller(at(10))
    controller.update_settings(sound_name="bubbles")
    assert controller.settings.sound_name == "bubbles"
    assert controller.settings.start_hour == 7


def test_changing_goal_toggles_today_reminders() -> None:
    controller, sink, _ = make_controller(at(10), goal=50)
    for _ in range(4):
        controller.log_drink()
    assert controller.tracker.intake.intake_oz == 40
    plan = controller.set_daily_goal(40)
    assert controller.tracker.is_goal_met_today
    assert plan.today_times == []
    assert sink.identifiers("today_") == []
    plan = controller.set_daily_goal(60)
    assert not controller.tracker.is_goal_met_today
    assert plan.today_times[0] == at(11)
    assert sink.identifiers("today_")
