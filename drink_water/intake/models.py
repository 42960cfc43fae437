"""饮水记录数据模型。"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from drink_water.config import DAILY_GOAL_OZ


class WaterIntake(BaseModel):
    """当天饮水量、目标与达成标记。"""
    intake_oz: int = Field(0, ge=0, description="今天已喝（盎司）")
    daily_goal_oz: int = Field(DAILY_GOAL_OZ, gt=0, description="每日目标（盎司）")
    last_intake_date: str = Field("", description="最近记录所属日期 YYYY-MM-DD")
    goal_met_date: str = Field("", description="达成目标的日期 YYYY-MM-DD；空为未达成")
    last_drink_at: Optional[datetime] = Field(None, description="上次喝水时间")
