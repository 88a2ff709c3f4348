"""Key-value backends and the progress repository."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from articulation.core.config import StorageConfig
from articulation.core.interfaces import KeyValueStore
from articulation.core.models import UNMEASURED, ExerciseAttempt, Measured, UserProgress
from articulation.services.storage import (
    FileStore,
    MemoryStore,
    ProgressRepository,
    SafeStore,
    build_store,
)

T0 = datetime(2026, 3, 1, 9, tzinfo=timezone.utc)


class BrokenStore:
    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("disk on fire")

    def remove(self, key):
        raise OSError("disk on fire")


def _attempt(attempt_id: str, exercise_id: str = "filler-words") -> ExerciseAttempt:
    return ExerciseAttempt(
        id=attempt_id, exercise_id=exercise_id, score=70,
        impacted_scores={"fluency": 70}, xp_earned=10, duration=60, timestamp=T0,
    )


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

def test_backends_satisfy_protocol(tmp_path):
    assert isinstance(MemoryStore(), KeyValueStore)
    assert isinstance(FileStore(tmp_path), KeyValueStore)
    assert isinstance(SafeStore(MemoryStore()), KeyValueStore)


def test_file_store_roundtrip(tmp_path):
    store = FileStore(tmp_path / "nested")
    assert store.get("user_progress:a/b") is None
    store.set("user_progress:a/b", '{"x": 1}')
    assert store.get("user_progress:a/b") == '{"x": 1}'
    store.remove("user_progress:a/b")
    store.remove("user_progress:a/b")
    assert store.get("user_progress:a/b") is None


def test_safe_store_swallows_backend_failures():
    store = SafeStore(BrokenStore())
    assert store.get("k") is None
    store.set("k", "v")
    store.remove("k")


def test_build_store(tmp_path):
    file_backed = build_store(StorageConfig(backend="file", data_dir=str(tmp_path)))
    assert isinstance(file_backed.inner, FileStore)
    assert isinstance(build_store(StorageConfig(backend="memory")).inner, MemoryStore)
    assert isinstance(build_store(StorageConfig(backend="redis")).inner, MemoryStore)


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

def test_missing_progress_is_default():
    repo = ProgressRepository(MemoryStore())
    progress = repo.get_user_progress("u1")
    assert not repo.has_progress("u1")
    assert progress.user_id == "u1"
    assert progress.current_streak == 0
    assert progress.archetype.id == "generic-speaker"


def test_progress_roundtrip():
    repo = ProgressRepository(MemoryStore())
    progress = UserProgress(user_id="u1", current_streak=3, total_xp=40, achievements=["streak-3"])
    progress.communication_score.fluency = Measured(72)
    repo.save_user_progress(progress)

    loaded = repo.get_user_progress("u1")
    assert repo.has_progress("u1")
    assert loaded.current_streak == 3
    assert loaded.total_xp == 40
    assert loaded.communication_score.fluency == Measured(72)
    assert loaded.achievements == ["streak-3"]


def test_corrupt_progress_falls_back_to_defaults():
    store = MemoryStore()
    repo = ProgressRepository(store)
    valid = UserProgress(user_id="u1", total_sessions=5).to_dict()
    corrupt = (
        "{not json",
        "[]",
        "{}",
        json.dumps({"communication_score": {"fluency": "high"}}),
        json.dumps({**valid, "communication_score": []}),
        json.dumps({**valid, "last_practice_date": "yesterday"}),
        json.dumps({**valid, "last_practice_date": 123}),
    )
    for raw in corrupt:
        store.set("user_progress:u1", raw)
        progress = repo.get_user_progress("u1")
        assert progress.total_sessions == 0
        assert progress.last_practice_date is None
        assert progress.archetype.id == "generic-speaker"


def test_stored_float_subscore_rounds_half_up():
    store = MemoryStore()
    record = UserProgress(user_id="u1").to_dict()
    record["communication_score"].update(fluency=69.6, clarity=70.5, precision=None)
    store.set("user_progress:u1", json.dumps(record))

    score = ProgressRepository(store).get_user_progress("u1").communication_score
    assert score.fluency == Measured(70)
    assert score.clarity == Measured(71)
    assert score.precision == UNMEASURED


def test_legacy_achievement_names_are_migrated():
    store = MemoryStore()
    record = UserProgress(user_id="u1").to_dict()
    record["achievements"] = ["🔥 7-Day Streak", "streak-7", "score-70", "🔥 30-Day Streak"]
    store.set("user_progress:u1", json.dumps(record))

    progress = ProgressRepository(store).get_user_progress("u1")
    assert progress.achievements == ["streak-7", "score-70", "streak-30"]


def test_history_append_and_filter():
    repo = ProgressRepository(MemoryStore())
    assert repo.get_exercise_history("u1") == []
    repo.append_attempt("u1", _attempt("a1"))
    repo.append_attempt("u1", _attempt("a2", "impromptu-response"))

    history = repo.get_exercise_history("u1")
    assert [a.id for a in history] == ["a1", "a2"]
    assert history[0].timestamp == T0
    assert [a.id for a in repo.get_exercise_attempts("u1", "impromptu-response")] == ["a2"]


def test_malformed_history_entries_are_skipped():
    store = MemoryStore()
    good = _attempt("ok").to_dict()
    store.set("exercise_attempts:u1", json.dumps([good, {"id": "broken"}, "junk", {**good, "score": "x"}]))
    assert [a.id for a in ProgressRepository(store).get_exercise_history("u1")] == ["ok"]

    store.set("exercise_attempts:u1", "{oops")
    assert ProgressRepository(store).get_exercise_history("u1") == []


def test_clear_removes_both_records():
    store = MemoryStore()
    repo = ProgressRepository(store)
    repo.save_user_progress(UserProgress(user_id="u1"))
    repo.append_attempt("u1", _attempt("a1"))
    repo.clear("u1")
    assert store.keys() == []


def test_repository_over_broken_store():
    repo = ProgressRepository(BrokenStore())
    repo.save_user_progress(UserProgress(user_id="u1", total_xp=5))
    repo.append_attempt("u1", _attempt("a1"))
    assert repo.get_user_progress("u1").total_xp == 0
    assert repo.get_exercise_history("u1") == []
