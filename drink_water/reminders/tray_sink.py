"""系统托盘通知端：到点弹出托盘气泡消息并播放提醒音效。"""
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from PyQt6.QtCore import QObject, QTimer, QUrl
from PyQt6.QtWidgets import QSystemTrayIcon

from drink_water.reminders.models import ReminderRequest
from drink_water.reminders.sounds import SoundResolver

logger = logging.getLogger(__name__)

# 可选：提醒音效（QtMultimedia 不可用时只弹消息）
try:
    from PyQt6.QtMultimedia import QSoundEffect
    _HAS_SOUND = True
except Exception:
    _HAS_SOUND = False
    QSoundEffect = None

TOOLTIP = "喝水提醒"


class TrayNotificationSink(QObject):
    """托盘通知端：每条提醒一个单次 QTimer，必须在 Qt 主线程使用。"""

    def __init__(
        self,
        tray: QSystemTrayIcon,
        sound_resolver: Optional[SoundResolver] = None,
        clock: Optional[Callable[[], datetime]] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._tray = tray
        self._sound_resolver = sound_resolver or SoundResolver()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._timers: Dict[str, QTimer] = {}
        self._sound = None
        self._tray.setToolTip(TOOLTIP)

    def clear_all(self) -> None:
        for timer in self._timers.values():
            timer.stop()
            timer.deleteLater()
        self._timers.clear()

    def submit(self, request: ReminderRequest) -> None:
        delay_ms = int((request.fire_at - self._clock()).total_seconds() * 1000)
        if delay_ms < 0:
            logger.debug("提醒 %s 已过触发时间，跳过", request.identifier)
            return
        old = self._timers.pop(request.identifier, None)
        if old is not None:
            old.stop()
            old.deleteLater()
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda r=request: self._fire(r))
        timer.start(delay_ms)
        self._timers[request.identifier] = timer

    def reset_badge(self) -> None:
        self._tray.setToolTip(TOOLTIP)

    def request_permission(self) -> bool:
        """托盘可用且支持气泡消息即视为已授权。"""
        return QSystemTrayIcon.isSystemTrayAvailable() and QSystemTrayIcon.supportsMessages()

    def _fire(self, request: ReminderRequest) -> None:
        timer = self._timers.pop(request.identifier, None)
        if timer is not None:
            timer.deleteLater()
        self._tray.showMessage(request.title, request.body, QSystemTrayIcon.MessageIcon.Information)
        self._tray.setToolTip(f"{TOOLTIP} ({request.badge})")
        self._play(request.sound)

    def _play(self, sound: Optional[str]) -> None:
        # 未找到音效时由系统气泡自带提示音
        if not sound or not _HAS_SOUND:
            return
        path = self._sound_resolver.path_for(sound)
        if path is None:
            return
        try:
            self._sound = QSoundEffect(self)
            self._sound.setSource(QUrl.fromLocalFile(str(path)))
            self._sound.play()
        except Exception as e:
            logger.warning("播放提醒音效失败: %s", e)
