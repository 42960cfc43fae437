"""提醒调度：计算今天剩余与明天全天的提醒时刻，并整批提交到通知端。

每次调度先清空通知端并重置角标，再按 today_0.. / tomorrow_0.. 顺序提交，
同一时间只有一份计划生效。调用方需串行调用（如都在 Qt 主线程）。
"""
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Callable, List, Optional

from drink_water.config import NOTIFICATION_BODY, NOTIFICATION_TITLE, ONCE_PER_DAY
from drink_water.reminders.models import ReminderPlan, ReminderRequest, ReminderSettings
from drink_water.reminders.sink import NotificationSink
from drink_water.reminders.slots import (
    compute_daily_slots,
    compute_first_reminder_from_last_drink,
    as_utc,
    local_day,
    slots_from,
    window_end,
)
from drink_water.reminders.sounds import SoundResolver

logger = logging.getLogger(__name__)

TODAY_PREFIX = "today_"
TOMORROW_PREFIX = "tomorrow_"


def _local_tz() -> tzinfo:
    return datetime.now().astimezone().tzinfo


class ReminderScheduler:
    """提醒调度器：时钟、时区、通知端与音效查找均由外部注入。"""

    def __init__(
        self,
        sink: NotificationSink,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
        sound_resolver: Optional[SoundResolver] = None,
    ):
        self.sink = sink
        self.tz = tz or _local_tz()
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.sound_resolver = sound_resolver or SoundResolver()

    def now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    def request_permission(self) -> bool:
        """申请通知权限。结果不影响调度：被拒绝时系统静默不投递。"""
        try:
            granted = bool(self.sink.request_permission())
        except Exception as e:
            logger.warning("申请通知权限失败: %s", e)
            return False
        if not granted:
            logger.info("通知权限未授予，提醒将不会显示")
        return granted

    def cancel_all(self) -> None:
        """清空全部待发提醒并重置角标。"""
        self.sink.clear_all()
        self.sink.reset_badge()

    def plan_for_today_and_tomorrow(
        self,
        settings: ReminderSettings,
        last_drink: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> ReminderPlan:
        """只计算不提交。相同输入与 now 得到相同计划。"""
        interval = settings.interval_minutes
        if interval < 0:
            return ReminderPlan()
        now = (now or self.now()).astimezone(self.tz)
        window = settings.window
        today = local_day(now, self.tz)
        tomorrow = today + timedelta(days=1)

        anchor = None
        if last_drink is not None:
            anchor = compute_first_reminder_from_last_drink(last_drink, interval, window, today, self.tz)

        if interval == ONCE_PER_DAY:
            # 锚点早于今天（上次喝水超过 24 小时）视为没有锚点
            if anchor is not None and local_day(anchor, self.tz) < today:
                anchor = None
            if anchor is None:
                today_times = self._after(compute_daily_slots(today, window, interval, self.tz), now)
            elif local_day(anchor, self.tz) == today and as_utc(anchor) > as_utc(now):
                today_times = [anchor]
            else:
                today_times = []
            if anchor is not None and local_day(anchor, self.tz) == tomorrow:
                tomorrow_times = [anchor]
            else:
                tomorrow_times = compute_daily_slots(tomorrow, window, interval, self.tz)
        else:
            if anchor is not None and local_day(anchor, self.tz) == today and as_utc(anchor) > as_utc(now):
                # 从锚点继续按间隔排到今天窗口结束
                end = window_end(today, window, self.tz)
                today_times = self._after(slots_from(anchor, end, interval, self.tz), now)
            else:
                today_times = self._after(compute_daily_slots(today, window, interval, self.tz), now)
            tomorrow_times = compute_daily_slots(tomorrow, window, interval, self.tz)

        return ReminderPlan(today_times=today_times, tomorrow_times=tomorrow_times)

    def plan_for_tomorrow(self, settings: ReminderSettings, now: Optional[datetime] = None) -> ReminderPlan:
        if settings.interval_minutes < 0:
            return ReminderPlan()
        now = (now or self.now()).astimezone(self.tz)
        tomorrow = local_day(now, self.tz) + timedelta(days=1)
        return ReminderPlan(
            tomorrow_times=compute_daily_slots(tomorrow, settings.window, settings.interval_minutes, self.tz),
        )

    def schedule_for_today_and_tomorrow(
        self,
        settings: ReminderSettings,
        last_drink: Optional[datetime] = None,
    ) -> ReminderPlan:
        """
        重新安排今天剩余与明天全天的提醒。
        last_drink 若提供，今天第一个提醒由上次喝水时间推算（夹到时间窗内）。
        """
        self.cancel_all()
        plan = self.plan_for_today_and_tomorrow(settings, last_drink)
        self._submit(plan, settings.sound_name)
        return plan

    def schedule_for_tomorrow(self, settings: ReminderSettings) -> ReminderPlan:
        """今天目标已达成：清空今天的提醒，只安排明天。"""
        self.cancel_all()
        plan = self.plan_for_tomorrow(settings)
        self._submit(plan, settings.sound_name)
        return plan

    @staticmethod
    def _after(times: List[datetime], now: datetime) -> List[datetime]:
        return [t for t in times if as_utc(t) > as_utc(now)]

    def _submit(self, plan: ReminderPlan, sound_name: str) -> None:
        sound = self.sound_resolver.resolve(sound_name)
        if sound is None:
            logger.debug("未找到音效 %r，使用系统默认提示音", sound_name)
        badge = 0
        for prefix, times in ((TODAY_PREFIX, plan.today_times), (TOMORROW_PREFIX, plan.tomorrow_times)):
            for index, fire_at in enumerate(times):
                badge += 1
                request = ReminderRequest(
                    identifier=f"{prefix}{index}",
                    fire_at=fire_at,
                    title=NOTIFICATION_TITLE,
                    body=NOTIFICATION_BODY,
                    sound=sound,
                    badge=badge,
                )
                try:
                    self.sink.submit(request)
                except Exception as e:
                    logger.warning("提交提醒 %s 失败: %s", request.identifier, e)
        logger.info("已安排提醒：今天 %d 条，明天 %d 条", len(plan.today_times), len(plan.tomorrow_times))
        logger.debug("今天 %s；明天 %s", _fmt(plan.today_times), _fmt(plan.tomorrow_times))


def _fmt(times: List[datetime]) -> str:
    return ", ".join(t.strftime("%m-%d %H:%M") for t in times) or "-"
