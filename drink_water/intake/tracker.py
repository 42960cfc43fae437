"""饮水计数：每点一次加固定量，跨天清零，记录今天是否达成目标。"""
from datetime import datetime, tzinfo
from typing import Callable, Optional, Tuple

from drink_water.config import GOAL_MAX_OZ, GOAL_MIN_OZ, GOAL_STEP_OZ, OZ_PER_TAP
from drink_water.intake.models import WaterIntake


class IntakeTracker:
    """当天饮水状态（仅内存）。"""

    def __init__(
        self,
        intake: Optional[WaterIntake] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
        oz_per_tap: int = OZ_PER_TAP,
    ):
        self.intake = intake or WaterIntake()
        self.tz = tz or datetime.now().astimezone().tzinfo
        self.clock = clock or (lambda: datetime.now(self.tz))
        self.oz_per_tap = oz_per_tap

    def now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    def today_string(self) -> str:
        return self.now().strftime("%Y-%m-%d")

    @property
    def is_goal_met_today(self) -> bool:
        return self.intake.goal_met_date == self.today_string()

    def mark_goal_met_today(self) -> None:
        self.intake.goal_met_date = self.today_string()

    def clear_goal_met_flag(self) -> None:
        self.intake.goal_met_date = ""

    def reset_if_needed(self) -> bool:
        """新的一天：清零饮水量与达成标记。返回是否发生了重置。"""
        today = self.today_string()
        if self.intake.last_intake_date == today:
            return False
        self.intake.intake_oz = 0
        self.intake.last_intake_date = today
        self.clear_goal_met_flag()
        return True

    def reset_today(self) -> None:
        """手动清零今天的记录。"""
        self.intake.intake_oz = 0
        self.intake.last_intake_date = self.today_string()
        self.intake.last_drink_at = None
        self.clear_goal_met_flag()

    def set_daily_goal(self, goal_oz: int) -> int:
        """修改每日目标（按步长取整并限制在可调范围内），同步今天的达成标记。返回实际目标。"""
        goal = round(goal_oz / GOAL_STEP_OZ) * GOAL_STEP_OZ
        goal = max(GOAL_MIN_OZ, min(GOAL_MAX_OZ, goal))
        self.intake.daily_goal_oz = goal
        if self.intake.intake_oz >= goal:
            self.mark_goal_met_today()
        else:
            self.clear_goal_met_flag()
        return goal

    def next_intake_step(self) -> Optional[Tuple[int, bool]]:
        """下一次点击后的饮水量及是否达成目标；已达到目标返回 None。"""
        goal = self.intake.daily_goal_oz
        if self.intake.intake_oz >= goal:
            return None
        new_value = min(self.intake.intake_oz + self.oz_per_tap, goal)
        return new_value, new_value >= goal

    def record_drink(self) -> Optional[Tuple[int, bool]]:
        """记录一次喝水。"""
        self.reset_if_needed()
        step = self.next_intake_step()
        if step is None:
            return None
        new_value, reached = step
        self.intake.intake_oz = new_value
        self.intake.last_drink_at = self.now()
        if reached:
            self.mark_goal_met_today()
        return step

    def last_drink_today(self) -> Optional[datetime]:
        """今天的上次喝水时间；今天还没喝过返回 None。"""
        last = self.intake.last_drink_at
        if last is None or last.astimezone(self.tz).strftime("%Y-%m-%d") != self.today_string():
            return None
        return last
