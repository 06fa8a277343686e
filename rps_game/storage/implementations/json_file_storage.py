"""
JSON 文件存储
JSON File Storage - 每条记录对应目录下的一个 JSON 文件
"""
import json
import os
from pathlib import Path
from typing import Any, Optional
from ..base.storage_base import StorageBase
from ...utils.exceptions import StorageFailure
from ...utils.logger import setup_logger

logger = setup_logger("RPS.JsonFileStorage")


class JsonFileStorage(StorageBase):
    """JSON 文件存储类"""

    def __init__(self, directory: str = "data", **kwargs):
        """
        初始化文件存储

        Args:
            directory: 记录文件所在目录，首次写入时创建
        """
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except FileNotFoundError:
            return None
        except json.JSONDecodeError as e:
            raise StorageFailure(f"记录文件损坏: {path}: {e}", key=key, operation="get") from e
        except OSError as e:
            raise StorageFailure(f"读取记录失败: {path}: {e}", key=key, operation="get") from e

    def set(self, key: str, value: Any):
        path = self._path(key)
        tmp_path = path.with_suffix('.json.tmp')
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except (TypeError, ValueError) as e:
            raise StorageFailure(f"记录无法序列化: {e}", key=key, operation="set") from e
        except OSError as e:
            raise StorageFailure(f"写入记录失败: {path}: {e}", key=key, operation="set") from e
        logger.debug(f"已写入记录: {path}")

    def remove(self, key: str):
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageFailure(f"删除记录失败: {path}: {e}", key=key, operation="remove") from e

    def get_status(self) -> dict:
        status = super().get_status()
        status["directory"] = str(self.directory)
        return status
