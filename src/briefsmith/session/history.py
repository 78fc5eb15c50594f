"""
Generation history persisted in a flat key-value store.
The whole history lives under one key as a JSON list, newest first.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import redis
from pydantic import ValidationError

from ..core.config import HISTORY_FILE, HISTORY_LIMIT, HISTORY_STORAGE_KEY, REDIS_URL
from ..core.models import Brief, GeneratedResult, HistoryEntry, Language

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Flat key -> text mapping"""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore:
    """In-process store, mainly for tests and embedding"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class FileKeyValueStore:
    """JSON file on local disk holding every key"""

    def __init__(self, path: Path = HISTORY_FILE):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            logger.warning(f"[History] Store file {self.path} is corrupt, rewriting it")
            data = {}
        data[key] = value

        # Write to a temp file first so a crash never leaves a half-written store
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise


class RedisKeyValueStore:
    """Store backed by a Redis server"""

    def __init__(self, redis_url: str = REDIS_URL, client=None):
        self.redis = client or redis.Redis.from_url(redis_url, decode_responses=True)

    def get(self, key: str) -> Optional[str]:
        return self.redis.get(key)

    def set(self, key: str, value: str) -> None:
        self.redis.set(key, value)


def get_default_store() -> KeyValueStore:
    """Redis when REDIS_URL is configured, otherwise the local JSON file"""
    if REDIS_URL:
        return RedisKeyValueStore(REDIS_URL)
    return FileKeyValueStore(HISTORY_FILE)


class HistoryRepository:
    """Loads and saves the history list under a single key"""

    def __init__(self, store: KeyValueStore, key: str = HISTORY_STORAGE_KEY):
        self.store = store
        self.key = key

    def load(self) -> List[HistoryEntry]:
        """Read the persisted history; absent or corrupt data yields an empty list"""
        try:
            raw = self.store.get(self.key)
        except Exception as e:
            logger.warning(f"[History] Could not read '{self.key}': {type(e).__name__}: {e}")
            return []
        if not raw:
            return []

        try:
            items = json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.warning(f"[History] Stored history is not valid JSON, starting empty: {e}")
            return []
        if not isinstance(items, list):
            logger.warning("[History] Stored history is not a list, starting empty")
            return []

        entries = []
        for item in items:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError as e:
                logger.warning(f"[History] Skipping unreadable entry: {e.error_count()} error(s)")
        return entries

    def save(self, entries: List[HistoryEntry]) -> None:
        payload = json.dumps([entry.model_dump(mode="json") for entry in entries], ensure_ascii=False)
        self.store.set(self.key, payload)


class HistoryManager:
    """Ordered, capped history of successful generations (newest first)"""

    def __init__(self, repository: HistoryRepository, limit: int = HISTORY_LIMIT):
        self.repository = repository
        self.limit = limit
        self._entries: List[HistoryEntry] = repository.load()[:limit]
        logger.info(f"[History] Loaded {len(self._entries)} entries")

    @property
    def entries(self) -> List[HistoryEntry]:
        """Detached copies, newest first; editing them never touches stored history"""
        return [entry.model_copy(deep=True) for entry in self._entries]

    def __len__(self):
        return len(self._entries)

    def get(self, entry_id: str) -> Optional[HistoryEntry]:
        entry = self._find(entry_id)
        return entry.model_copy(deep=True) if entry is not None else None

    def _find(self, entry_id: str) -> Optional[HistoryEntry]:
        return next((entry for entry in self._entries if entry.id == entry_id), None)

    def add(self, brief: Brief, result: GeneratedResult, language: Optional[Language] = None) -> HistoryEntry:
        """Snapshot a generation at the head; the oldest entry drops past the limit"""
        entry = HistoryEntry.snapshot(brief, result, language)
        if self._find(entry.id) is not None:
            entry = entry.model_copy(update={"id": f"{entry.id}-{len(self._entries)}"})
        self._entries = [entry] + self._entries[:self.limit - 1]
        self._persist()
        return entry.model_copy(deep=True)

    def remove(self, entry_id: str) -> bool:
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            return False
        self._entries = remaining
        self._persist()
        return True

    def clear(self):
        self._entries = []
        self._persist()

    def _persist(self):
        try:
            self.repository.save(self._entries)
        except Exception as e:
            logger.error(f"[History] Failed to persist {len(self._entries)} entries: {type(e).__name__}: {e}")


def create_history_manager(store: Optional[KeyValueStore] = None) -> HistoryManager:
    return HistoryManager(HistoryRepository(store or get_default_store()))
