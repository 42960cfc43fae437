"""通知端接口与内存实现（测试替身 / 无界面运行）。"""
from datetime import datetime
from typing import Dict, List, Protocol, runtime_checkable

from drink_water.reminders.models import ReminderRequest


@runtime_checkable
class NotificationSink(Protocol):
    """通知端：清空待发提醒、提交提醒、重置角标、申请权限。"""

    def clear_all(self) -> None:
        ...

    def submit(self, request: ReminderRequest) -> None:
        ...

    def reset_badge(self) -> None:
        ...

    def request_permission(self) -> bool:
        ...


class InMemoryNotificationSink:
    """内存通知端：记录提交的提醒，供断言或无托盘环境使用。"""

    def __init__(self, permission_granted: bool = True):
        self.permission_granted = permission_granted
        self.permission_requested = False
        self.clear_count = 0
        self.badge_reset_count = 0
        self.badge = 0
        # 同一 identifier 后提交的覆盖先提交的；dict 保持插入顺序
        self._pending: Dict[str, ReminderRequest] = {}

    def clear_all(self) -> None:
        self.clear_count += 1
        self._pending.clear()

    def submit(self, request: ReminderRequest) -> None:
        self._pending.pop(request.identifier, None)
        self._pending[request.identifier] = request

    def reset_badge(self) -> None:
        self.badge_reset_count += 1
        self.badge = 0

    def request_permission(self) -> bool:
        self.permission_requested = True
        return self.permission_granted

    def deliver_due(self, now: datetime) -> List[ReminderRequest]:
        """取出已到触发时间的提醒（模拟系统投递），角标更新为最后一条的数字。"""
        due = [r for r in self._pending.values() if r.fire_at <= now]
        for r in due:
            del self._pending[r.identifier]
            self.badge = r.badge
        return due

    def pending(self) -> List[ReminderRequest]:
        """按提交顺序返回待发提醒。"""
        return list(self._pending.values())

    def identifiers(self, prefix: str = "") -> List[str]:
        return [r.identifier for r in self.pending() if r.identifier.startswith(prefix)]
