"""
存储实现模块
Storage Implementations
"""
from .memory_storage import MemoryStorage
from .json_file_storage import JsonFileStorage
from ..factory.storage_factory import StorageFactory

# 自动注册到工厂类
StorageFactory.register_storage('memory', MemoryStorage)
StorageFactory.register_storage('json_file', JsonFileStorage)

__all__ = ['MemoryStorage', 'JsonFileStorage']
