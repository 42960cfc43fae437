"""应用层：把饮水计数与提醒调度连接到界面事件。"""
from drink_water.app.controller import HydrationController

__all__ = ["HydrationController"]
