"""喝水提醒全局配置与路径。"""
from pathlib import Path

# 项目根目录（drink_water 包所在目录的上一级）
ROOT_DIR = Path(__file__).resolve().parent.parent
# 数据目录：日志等
DATA_DIR = ROOT_DIR / "data"
LOG_DIR = DATA_DIR / "logs"
# 提醒音效资源目录（其下可再有 Sounds 子目录）
RESOURCES_DIR = ROOT_DIR / "resources"
SOUNDS_SUBDIR = "Sounds"
SOUND_EXTENSIONS = ("caf", "aiff", "wav")

# 提醒时间窗默认（小时，0-23）
DEFAULT_START_HOUR = 7   # 早上 7 点
DEFAULT_END_HOUR = 22    # 晚上 10 点
# 提醒间隔（分钟）；0 表示每天一次
ONCE_PER_DAY = 0
DEFAULT_INTERVAL_MINUTES = 60
DEFAULT_SOUND_NAME = "drink more water"

# 通知内容
NOTIFICATION_TITLE = "该喝水了"
NOTIFICATION_BODY = "喝完水后点一下杯子。"

# 饮水目标（盎司）
DAILY_GOAL_OZ = 80
OZ_PER_TAP = 10
# 每日目标可调范围与步长
GOAL_MIN_OZ = 40
GOAL_MAX_OZ = 200
GOAL_STEP_OZ = 10

# 日志轮转
LOG_FILE = LOG_DIR / "drink-water.log"
LOG_MAX_BYTES = 1 * 1024 * 1024
LOG_BACKUP_COUNT = 3


def ensure_dirs() -> None:
    """确保数据目录存在。"""
    for d in (DATA_DIR, LOG_DIR):
        d.mkdir(parents=True, exist_ok=True)
