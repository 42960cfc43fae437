"""喝水提醒：记录饮水、每日目标与定时提醒。"""
__version__ = "0.1.0"
