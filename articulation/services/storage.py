"""
Articulation — Persistence

Key-value backends plus the repository that (de)serializes per-user
records on top of them:

  user_progress:<user_id>      → UserProgress JSON
  exercise_attempts:<user_id>  → JSON array of ExerciseAttempt

Nothing here raises to the caller. An unavailable store reads as
"absent" and drops writes; unparsable records fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from ..core.config import StorageConfig, storage_cfg
from ..core.interfaces import KeyValueStore
from ..core.models import ExerciseAttempt, UserProgress
from ..data.archetypes import DEFAULT_ARCHETYPE

logger = logging.getLogger("articulation.storage")

# Achievement names stored by older releases → catalog ids
LEGACY_ACHIEVEMENT_IDS: Dict[str, str] = {
    f"🔥 {days}-Day Streak": f"streak-{days}" for days in (7, 14, 30, 60, 100)
}


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class MemoryStore:
    """Process-local dict store. Used in tests and the default server."""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class FileStore:
    """One file per key under `root`. Raises OSError on I/O failure."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def _path(self, key: str) -> Path:
        return self._root / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class SafeStore:
    """Wraps any KeyValueStore so that failures become "absent" / no-op."""

    def __init__(self, inner: KeyValueStore) -> None:
        self._inner = inner

    @property
    def inner(self) -> KeyValueStore:
        return self._inner

    def get(self, key: str) -> Optional[str]:
        try:
            return self._inner.get(key)
        except Exception as e:
            logger.warning(f"Store read failed for {key!r}: {e}")
            return None

    def set(self, key: str, value: str) -> None:
        try:
            self._inner.set(key, value)
        except Exception as e:
            logger.warning(f"Store write dropped for {key!r}: {e}")

    def remove(self, key: str) -> None:
        try:
            self._inner.remove(key)
        except Exception as e:
            logger.warning(f"Store remove failed for {key!r}: {e}")


def build_store(cfg: StorageConfig = storage_cfg) -> SafeStore:
    if cfg.backend == "file":
        logger.info(f"Using file store at {cfg.data_dir}")
        return SafeStore(FileStore(cfg.data_dir))
    if cfg.backend != "memory":
        logger.warning(f"Unknown store backend {cfg.backend!r}, using memory")
    return SafeStore(MemoryStore())


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

def default_progress(user_id: str) -> UserProgress:
    return UserProgress(user_id=user_id, archetype=DEFAULT_ARCHETYPE)


def _migrate_achievements(raw: List[str]) -> List[str]:
    migrated: List[str] = []
    for achievement in raw:
        achievement = LEGACY_ACHIEVEMENT_IDS.get(achievement, achievement)
        if achievement not in migrated:
            migrated.append(achievement)
    return migrated


class ProgressRepository:
    """Reads and writes the two per-user records through a SafeStore."""

    def __init__(self, store: KeyValueStore, cfg: StorageConfig = storage_cfg) -> None:
        self._store = store if isinstance(store, SafeStore) else SafeStore(store)
        self._cfg = cfg

    def _progress_key(self, user_id: str) -> str:
        return f"{self._cfg.progress_key_prefix}{user_id}"

    def _attempts_key(self, user_id: str) -> str:
        return f"{self._cfg.attempts_key_prefix}{user_id}"

    # ── Progress ────────────────────────────────────────────────────────

    def has_progress(self, user_id: str) -> bool:
        return self._store.get(self._progress_key(user_id)) is not None

    def get_user_progress(self, user_id: str) -> UserProgress:
        raw = self._store.get(self._progress_key(user_id))
        if not raw:
            return default_progress(user_id)
        try:
            data: Any = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("progress record is not an object")
            progress = UserProgress.from_dict(data, user_id=user_id)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning(f"[{user_id}] Corrupt progress record, using defaults: {e}")
            return default_progress(user_id)
        progress.achievements = _migrate_achievements(progress.achievements)
        return progress

    def save_user_progress(self, progress: UserProgress) -> None:
        self._store.set(self._progress_key(progress.user_id), json.dumps(progress.to_dict()))

    # ── Attempt history ─────────────────────────────────────────────────

    def get_exercise_history(self, user_id: str) -> List[ExerciseAttempt]:
        raw = self._store.get(self._attempts_key(user_id))
        if not raw:
            return []
        try:
            data: Any = json.loads(raw)
        except ValueError as e:
            logger.warning(f"[{user_id}] Corrupt attempt history, ignoring: {e}")
            return []
        if not isinstance(data, list):
            logger.warning(f"[{user_id}] Attempt history is not a list, ignoring")
            return []

        attempts: List[ExerciseAttempt] = []
        for entry in data:
            try:
                attempts.append(ExerciseAttempt.from_dict(entry))
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                logger.warning(f"[{user_id}] Skipping malformed attempt: {e}")
        return attempts

    def get_exercise_attempts(self, user_id: str, exercise_id: str) -> List[ExerciseAttempt]:
        return [a for a in self.get_exercise_history(user_id) if a.exercise_id == exercise_id]

    def append_attempt(self, user_id: str, attempt: ExerciseAttempt) -> None:
        history = self.get_exercise_history(user_id)
        history.append(attempt)
        self._store.set(
            self._attempts_key(user_id),
            json.dumps([a.to_dict() for a in history]),
        )

    # ── Reset ───────────────────────────────────────────────────────────

    def clear(self, user_id: str) -> None:
        self._store.remove(self._progress_key(user_id))
        self._store.remove(self._attempts_key(user_id))
        logger.info(f"[{user_id}] Progress and history cleared")
