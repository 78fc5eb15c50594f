"""Session persistence: generation history and its key-value stores"""

from .history import (
    FileKeyValueStore,
    HistoryManager,
    HistoryRepository,
    KeyValueStore,
    MemoryKeyValueStore,
    RedisKeyValueStore,
    create_history_manager,
    get_default_store,
)

__all__ = [
    'FileKeyValueStore',
    'HistoryManager',
    'HistoryRepository',
    'KeyValueStore',
    'MemoryKeyValueStore',
    'RedisKeyValueStore',
    'create_history_manager',
    'get_default_store',
]
