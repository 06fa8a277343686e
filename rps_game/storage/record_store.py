"""
会话记录存取
Record Store - 比分、历史、统计三条命名记录的读写
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional
from .base.storage_base import StorageBase
from ..utils.exceptions import StorageFailure
from ..utils.logger import setup_logger

logger = setup_logger("RPS.RecordStore")

SCORES_KEY = 'rps_scores'
HISTORY_KEY = 'rps_game_history'
STATS_KEY = 'rps_stats'
ALL_KEYS = (SCORES_KEY, HISTORY_KEY, STATS_KEY)

DEFAULT_HISTORY_LIMIT = 50


@dataclass
class StorageResult:
    """写操作结果"""
    ok: bool
    error: Optional[StorageFailure] = None

    def __bool__(self):
        return self.ok


class RecordStore:
    """
    记录存取类

    读操作失败时抛出 StorageFailure；写操作不抛出，失败时返回 ok=False 的
    StorageResult 并记录警告日志。
    """

    def __init__(self, storage: StorageBase, history_limit: int = DEFAULT_HISTORY_LIMIT):
        """
        Args:
            storage: 底层键值存储
            history_limit: 保存历史的最大条数
        """
        self.storage = storage
        self.history_limit = history_limit

    def _write(self, operation: str, key: str, action: Callable) -> StorageResult:
        try:
            action()
        except StorageFailure as e:
            logger.warning(f"存储{operation}失败 [{key}]: {e.message}")
            return StorageResult(ok=False, error=e)
        return StorageResult(ok=True)

    def load(self, key: str) -> Optional[Any]:
        """读取记录，不存在返回None"""
        value = self.storage.get(key)
        if key == HISTORY_KEY and value is not None:
            if not isinstance(value, list):
                raise StorageFailure(f"历史记录必须是列表: {type(value).__name__}",
                                     key=key, operation="get")
            value = value[:self.history_limit]
        elif value is not None and not isinstance(value, dict):
            raise StorageFailure(f"记录必须是对象: {type(value).__name__}", key=key, operation="get")
        return value

    def save(self, key: str, value: Any) -> StorageResult:
        """写入记录，历史记录按容量截断"""
        if key == HISTORY_KEY:
            value = list(value)[:self.history_limit]
        return self._write("写入", key, lambda: self.storage.set(key, value))

    def remove(self, key: str) -> StorageResult:
        """删除一条记录"""
        return self._write("删除", key, lambda: self.storage.remove(key))
