"""
存储工厂模块
Storage Factory Module
"""
from .storage_factory import StorageFactory

__all__ = ['StorageFactory']
