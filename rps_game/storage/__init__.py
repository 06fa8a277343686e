"""
持久化存储模块
Persistence Storage Module
"""
from .base import StorageBase
from .factory.storage_factory import StorageFactory
from .implementations import MemoryStorage, JsonFileStorage
from .record_store import (
    RecordStore, StorageResult, SCORES_KEY, HISTORY_KEY, STATS_KEY, ALL_KEYS
)

__all__ = [
    'StorageBase',
    'StorageFactory',
    'MemoryStorage',
    'JsonFileStorage',
    'RecordStore',
    'StorageResult',
    'SCORES_KEY',
    'HISTORY_KEY',
    'STATS_KEY',
    'ALL_KEYS'
]
