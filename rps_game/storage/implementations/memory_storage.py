"""
内存存储
Memory Storage - 进程内的键值存储，值以 JSON 文本保存
"""
import json
from typing import Any, Dict, Optional
from ..base.storage_base import StorageBase
from ...utils.exceptions import StorageFailure


class MemoryStorage(StorageBase):
    """内存存储类"""

    def __init__(self, **kwargs):
        # 与文件存储共用配置节，忽略 directory 等参数
        self._records: Dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._records.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageFailure(f"记录无法解析: {e}", key=key, operation="get") from e

    def set(self, key: str, value: Any):
        try:
            self._records[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise StorageFailure(f"记录无法序列化: {e}", key=key, operation="set") from e

    def remove(self, key: str):
        self._records.pop(key, None)

    def get_status(self) -> dict:
        status = super().get_status()
        status["records"] = len(self._records)
        return status
