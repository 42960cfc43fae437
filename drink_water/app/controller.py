"""应用控制：启动、喝水、修改设置、达成目标时重新安排提醒。"""
import logging
from datetime import datetime
from typing import Optional, Tuple

from drink_water.intake.tracker import IntakeTracker
from drink_water.reminders.models import ReminderPlan, ReminderSettings
from drink_water.reminders.scheduler import ReminderScheduler

logger = logging.getLogger(__name__)


class HydrationController:
    """把饮水计数与提醒调度串起来；所有调用需在同一线程串行执行。"""

    def __init__(
        self,
        scheduler: ReminderScheduler,
        tracker: Optional[IntakeTracker] = None,
        settings: Optional[ReminderSettings] = None,
    ):
        self.scheduler = scheduler
        self.tracker = tracker or IntakeTracker(clock=scheduler.clock, tz=scheduler.tz)
        self.settings = settings or ReminderSettings()
        self._permission_requested = False
        self.permission_granted = False

    def on_launch(self) -> ReminderPlan:
        """启动：跨天清零、申请一次通知权限、安排提醒。"""
        self.tracker.reset_if_needed()
        if not self._permission_requested:
            self._permission_requested = True
            self.permission_granted = self.scheduler.request_permission()
        return self.reschedule(self.tracker.last_drink_today())

    def log_drink(self) -> Optional[Tuple[int, bool]]:
        """点一次杯子。已达到目标时不做任何事并返回 None。"""
        step = self.tracker.record_drink()
        if step is None:
            return None
        new_value, reached = step
        if reached:
            logger.info("今天目标已达成（%d oz），只安排明天的提醒", new_value)
            self.scheduler.schedule_for_tomorrow(self.settings)
        else:
            self.scheduler.schedule_for_today_and_tomorrow(self.settings, self.tracker.intake.last_drink_at)
        return step

    def apply_settings(self, settings: ReminderSettings) -> ReminderPlan:
        """修改提醒设置后以当前时间为上次喝水基准重新安排。"""
        self.settings = settings
        return self.reschedule(self.scheduler.now())

    def update_settings(self, **changes) -> ReminderPlan:
        """修改部分设置项（开始/结束小时、间隔、音效），校验后重新安排。"""
        return self.apply_settings(ReminderSettings(**{**self.settings.model_dump(), **changes}))

    def reset_today(self) -> ReminderPlan:
        """清零今天的饮水量，以当前时间为上次喝水基准重新安排。"""
        self.tracker.reset_today()
        return self.reschedule(self.scheduler.now())

    def set_daily_goal(self, goal_oz: int) -> ReminderPlan:
        """修改每日目标；达成状态可能随之改变，因此重新安排。"""
        goal = self.tracker.set_daily_goal(goal_oz)
        logger.info("每日目标改为 %d oz", goal)
        return self.reschedule(self.tracker.last_drink_today())

    def reschedule(self, last_drink: Optional[datetime] = None) -> ReminderPlan:
        if self.tracker.is_goal_met_today:
            return self.scheduler.schedule_for_tomorrow(self.settings)
        return self.scheduler.schedule_for_today_and_tomorrow(self.settings, last_drink)
