"""喝水提醒入口：托盘图标 + 菜单（喝了一杯 / 提醒间隔与时间窗 / 音效 / 每日目标 / 清零 / 退出），到点弹出提醒。"""
import argparse
import logging
import sys
from typing import Any, Callable, List, Optional, Tuple

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QActionGroup
from PyQt6.QtWidgets import QApplication, QMenu, QStyle, QSystemTrayIcon

from drink_water import __version__
from drink_water.app.controller import HydrationController
from drink_water.config import (
    DEFAULT_END_HOUR,
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_SOUND_NAME,
    DEFAULT_START_HOUR,
    GOAL_MAX_OZ,
    GOAL_MIN_OZ,
    GOAL_STEP_OZ,
    ONCE_PER_DAY,
    ensure_dirs,
)
from drink_water.logging_setup import setup_logging
from drink_water.reminders.models import ReminderSettings
from drink_water.reminders.scheduler import ReminderScheduler
from drink_water.reminders.sounds import SoundResolver
from drink_water.reminders.tray_sink import TrayNotificationSink

logger = logging.getLogger(__name__)

# 菜单可选的提醒间隔（分钟）
INTERVAL_CHOICES = [
    ("每 30 分钟", 30),
    ("每小时", 60),
    ("每 2 小时", 120),
    ("每天一次", ONCE_PER_DAY),
]
DAY_CHECK_INTERVAL_MS = 60 * 1000


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="喝水提醒（系统托盘）")
    parser.add_argument("--start", type=int, default=DEFAULT_START_HOUR, help="提醒开始小时 0-23")
    parser.add_argument("--end", type=int, default=DEFAULT_END_HOUR, help="提醒结束小时 0-23")
    parser.add_argument("--interval", type=int, default=DEFAULT_INTERVAL_MINUTES, help="提醒间隔分钟，0 为每天一次")
    parser.add_argument("--sound", default=DEFAULT_SOUND_NAME, help="提醒音效名")
    parser.add_argument("--debug", action="store_true", help="控制台输出调试日志")
    return parser.parse_args(argv)


def add_choice_menu(menu: QMenu, title: str, choices: List[Tuple[str, Any]], current: Any, on_pick: Callable[[Any], None]) -> QMenu:
    """单选子菜单：勾选当前值，点选后回调。"""
    sub = menu.addMenu(title)
    group = QActionGroup(sub)
    for label, value in choices:
        action = sub.addAction(label)
        action.setCheckable(True)
        action.setChecked(value == current)
        action.triggered.connect(lambda _checked, v=value: on_pick(v))
        group.addAction(action)
    return sub


def build_menu(controller: HydrationController, app: QApplication, sound_names: List[str]) -> QMenu:
    menu = QMenu()
    status = menu.addAction("")
    status.setEnabled(False)

    def refresh_status() -> None:
        intake = controller.tracker.intake
        done = " ✓" if controller.tracker.is_goal_met_today else ""
        status.setText(f"今天 {intake.intake_oz}/{intake.daily_goal_oz} oz{done}")

    def on_drink() -> None:
        controller.log_drink()
        refresh_status()

    def on_goal(goal_oz: int) -> None:
        controller.set_daily_goal(goal_oz)
        refresh_status()

    def on_reset() -> None:
        controller.reset_today()
        refresh_status()

    menu.addSeparator()
    menu.addAction("喝了一杯").triggered.connect(on_drink)

    settings = controller.settings
    add_choice_menu(menu, "提醒间隔", INTERVAL_CHOICES, settings.interval_minutes,
                    lambda m: controller.update_settings(interval_minutes=m))
    hours = [(f"{h}:00", h) for h in range(24)]
    add_choice_menu(menu, "开始时间", hours, settings.start_hour,
                    lambda h: controller.update_settings(start_hour=h))
    add_choice_menu(menu, "结束时间", hours, settings.end_hour,
                    lambda h: controller.update_settings(end_hour=h))
    sounds = [(name, name) for name in sound_names]
    add_choice_menu(menu, "提醒音效", sounds, settings.sound_name,
                    lambda s: controller.update_settings(sound_name=s))
    goals = [(f"{oz} oz", oz) for oz in range(GOAL_MIN_OZ, GOAL_MAX_OZ + 1, GOAL_STEP_OZ)]
    add_choice_menu(menu, "每日目标", goals, controller.tracker.intake.daily_goal_oz, on_goal)

    menu.addAction("清零今天").triggered.connect(on_reset)
    menu.addSeparator()
    menu.addAction("退出").triggered.connect(app.quit)
    menu.aboutToShow.connect(refresh_status)
    refresh_status()
    return menu


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    ensure_dirs()
    setup_logging(logging.DEBUG if args.debug else logging.INFO)

    app = QApplication(sys.argv)
    app.setApplicationName("喝水提醒")
    app.setApplicationVersion(__version__)
    app.setQuitOnLastWindowClosed(False)

    settings = ReminderSettings(
        start_hour=args.start,
        end_hour=args.end,
        interval_minutes=args.interval,
        sound_name=args.sound,
    )
    icon = app.style().standardIcon(QStyle.StandardPixmap.SP_DriveCDIcon)
    tray = QSystemTrayIcon(icon)
    resolver = SoundResolver()
    sink = TrayNotificationSink(tray, sound_resolver=resolver)
    scheduler = ReminderScheduler(sink, sound_resolver=resolver)
    controller = HydrationController(scheduler, settings=settings)

    menu = build_menu(controller, app, resolver.available_names())
    tray.setContextMenu(menu)
    tray.show()

    controller.on_launch()
    logger.info("喝水提醒已启动 v%s，权限: %s", __version__, controller.permission_granted)

    # 跨天后清零并按新的一天重新安排
    def check_new_day() -> None:
        if controller.tracker.reset_if_needed():
            controller.reschedule(None)

    day_timer = QTimer()
    day_timer.timeout.connect(check_new_day)
    day_timer.start(DAY_CHECK_INTERVAL_MS)

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
