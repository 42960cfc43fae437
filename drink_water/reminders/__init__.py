"""喝水提醒调度与通知。"""
from drink_water.reminders.models import ReminderPlan, ReminderRequest, ReminderSettings, ReminderWindow
from drink_water.reminders.scheduler import ReminderScheduler
from drink_water.reminders.sink import InMemoryNotificationSink, NotificationSink
from drink_water.reminders.slots import compute_daily_slots, compute_first_reminder_from_last_drink
from drink_water.reminders.sounds import SoundResolver

__all__ = [
    "ReminderPlan",
    "ReminderRequest",
    "ReminderSettings",
    "ReminderWindow",
    "ReminderScheduler",
    "InMemoryNotificationSink",
    "NotificationSink",
    "compute_daily_slots",
    "compute_first_reminder_from_last_drink",
    "SoundResolver",
]
