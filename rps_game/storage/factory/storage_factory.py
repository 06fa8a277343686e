"""
存储工厂类
Storage Factory Class
"""
from typing import Dict, Any
from ..base.storage_base import StorageBase
from ...utils.exceptions import ConfigurationException


class StorageFactory:
    """存储工厂类，负责按名称创建存储实例"""

    _storage_classes: Dict[str, type] = {}

    @classmethod
    def register_storage(cls, name: str, storage_class: type):
        """
        注册存储类

        Args:
            name: 存储名称（如 'json_file'）
            storage_class: 存储类（必须继承自StorageBase）
        """
        if not issubclass(storage_class, StorageBase):
            raise TypeError(f"{storage_class} must be a subclass of StorageBase")
        cls._storage_classes[name.lower()] = storage_class

    @classmethod
    def create_storage(cls, name: str, config: Dict[str, Any]) -> StorageBase:
        """
        创建存储实例

        Args:
            name: 存储名称
            config: 构造参数

        Returns:
            StorageBase: 存储实例
        """
        name_lower = str(name).lower()
        if name_lower not in cls._storage_classes:
            raise ConfigurationException(f"Unknown storage: {name}", config_key='storage.type')

        storage_class = cls._storage_classes[name_lower]
        try:
            return storage_class(**config)
        except TypeError as e:
            raise ConfigurationException(f"存储参数错误 ({name}): {e}", config_key='storage') from e

    @classmethod
    def create_from_config(cls, storage_config: Dict[str, Any]) -> StorageBase:
        """根据 storage 配置节创建存储实例，type 字段之外的键作为构造参数"""
        storage_type = storage_config.get('type', 'memory')
        params = {k: v for k, v in storage_config.items() if k != 'type'}
        return cls.create_storage(storage_type, params)

    @classmethod
    def list_storages(cls) -> list:
        """列出所有已注册的存储类型"""
        return list(cls._storage_classes.keys())
