"""
存储抽象基类
Storage Base Class
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class StorageBase(ABC):
    """键值存储抽象基类，失败时抛出 StorageFailure"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        读取记录

        Args:
            key: 记录名

        Returns:
            Optional[Any]: 记录内容（JSON 兼容的值），不存在返回None
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any):
        """
        写入记录

        Args:
            key: 记录名
            value: JSON 兼容的值
        """
        pass

    @abstractmethod
    def remove(self, key: str):
        """
        删除记录，不存在时不报错

        Args:
            key: 记录名
        """
        pass

    def get_status(self) -> dict:
        """
        获取存储状态信息（可选实现）

        Returns:
            dict: 状态信息字典
        """
        return {"type": self.__class__.__name__}
