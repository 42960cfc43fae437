"""提醒音效查找：按名称在资源目录中匹配音效文件。"""
from pathlib import Path
from typing import List, Optional

from drink_water.config import DEFAULT_SOUND_NAME, RESOURCES_DIR, SOUND_EXTENSIONS, SOUNDS_SUBDIR


class SoundResolver:
    """在 资源目录/Sounds 与 资源目录 下查找音效（名称不区分大小写）。"""

    def __init__(self, base_dir: Optional[Path] = None):
        self.base_dir = base_dir or RESOURCES_DIR

    def _search_dirs(self) -> List[Path]:
        return [self.base_dir / SOUNDS_SUBDIR, self.base_dir]

    @staticmethod
    def _files(directory: Path) -> List[Path]:
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.iterdir() if p.is_file())

    def _search(self, directory: Path, name: str) -> Optional[str]:
        files = self._files(directory)
        wanted = name.lower()
        # 优先 caf / aiff / wav，其次任意扩展名
        for ext in SOUND_EXTENSIONS:
            for p in files:
                if p.stem.lower() == wanted and p.suffix.lower() == f".{ext}":
                    return p.name
        for p in files:
            if p.stem.lower() == wanted:
                return p.name
        return None

    def resolve(self, name: str) -> Optional[str]:
        """返回匹配的音效文件名；找不到返回 None（使用系统默认提示音）。"""
        if not name:
            return None
        for directory in self._search_dirs():
            found = self._search(directory, name)
            if found:
                return found
        return None

    def path_for(self, file_name: str) -> Optional[Path]:
        """音效文件名对应的完整路径。"""
        for directory in self._search_dirs():
            path = directory / file_name
            if path.is_file():
                return path
        return None

    def available_names(self) -> List[str]:
        """列出可选音效名（去扩展名、去重、按名称排序），供设置界面使用。"""
        names = set()
        for directory in self._search_dirs():
            for p in self._files(directory):
                if p.suffix.lower().lstrip(".") in SOUND_EXTENSIONS:
                    names.add(p.stem)
        if not names:
            names.add(DEFAULT_SOUND_NAME)
        return sorted(names, key=str.lower)
