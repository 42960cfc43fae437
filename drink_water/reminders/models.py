"""提醒时间窗、设置、通知请求与计划数据模型。"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from drink_water.config import (
    DEFAULT_END_HOUR,
    DEFAULT_INTERVAL_MINUTES,
    DEFAULT_SOUND_NAME,
    DEFAULT_START_HOUR,
)


class ReminderWindow(BaseModel):
    """每日允许提醒的时间窗（整点，按调用方时区逐日换算）。"""
    start_hour: int = Field(..., ge=0, le=23, description="开始小时")
    end_hour: int = Field(..., ge=0, le=23, description="结束小时（含）")

    model_config = ConfigDict(frozen=True)

    @property
    def is_valid(self) -> bool:
        """开始晚于结束时当天没有任何提醒。"""
        return self.start_hour <= self.end_hour


class ReminderSettings(BaseModel):
    """用户提醒设置（由设置界面维护，调度器只读取）。"""
    start_hour: int = Field(DEFAULT_START_HOUR, ge=0, le=23, description="提醒开始小时")
    end_hour: int = Field(DEFAULT_END_HOUR, ge=0, le=23, description="提醒结束小时")
    interval_minutes: int = Field(
        DEFAULT_INTERVAL_MINUTES,
        description="提醒间隔分钟；0 为每天一次，负数不安排提醒",
    )
    sound_name: str = Field(DEFAULT_SOUND_NAME, description="提醒音效名（不含扩展名）")

    @property
    def window(self) -> ReminderWindow:
        return ReminderWindow(start_hour=self.start_hour, end_hour=self.end_hour)


class ReminderRequest(BaseModel):
    """提交给通知端的一条一次性提醒。"""
    identifier: str = Field(..., description="today_<n> / tomorrow_<n>")
    fire_at: datetime = Field(..., description="触发时间（带时区）")
    title: str = Field(..., description="标题")
    body: str = Field(..., description="正文")
    sound: Optional[str] = Field(None, description="音效文件名；None 为系统默认提示音")
    badge: int = Field(..., ge=1, description="角标数字")


class ReminderPlan(BaseModel):
    """一次调度计算出的今天与明天的提醒时间。"""
    today_times: List[datetime] = Field(default_factory=list)
    tomorrow_times: List[datetime] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.today_times) + len(self.tomorrow_times)
