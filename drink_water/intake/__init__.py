"""饮水记录与每日目标。"""
from drink_water.intake.models import WaterIntake
from drink_water.intake.tracker import IntakeTracker

__all__ = ["WaterIntake", "IntakeTracker"]
