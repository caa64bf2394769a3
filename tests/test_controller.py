"""Tests for the review controller (answer recording and session flow)."""

import json
import threading
import time
from unittest.mock import MagicMock

import pytest

from vocab_drill.db import MemoryKeyValueStore, StorageError
from vocab_drill.repositories import ReviewStatRepository
from vocab_drill.sessions import ReviewController, SessionStore
from vocab_drill.srs.shuffle import SeededRandom
from vocab_drill.srs.sm2 import Quality, advance
from vocab_drill.srs.time import DAY_MS

NOW = 1_704_067_200_000


@pytest.fixture
def controller(repository):
    return ReviewController(
        repository,
        user_id="user-1",
        session_store=SessionStore(),
        rng=SeededRandom(1),
        clock=lambda: NOW,
    )


def test_stats_load_lazily_from_storage(kv_store):
    repo = ReviewStatRepository(kv_store, key="test.srs")
    repo.save({"word-1": advance(None, 4, now=NOW - DAY_MS)})
    controller = ReviewController(repo, session_store=SessionStore(), clock=lambda: NOW)

    assert list(controller.stats) == ["word-1"]
    assert controller.stat_for("word-1").repetitions == 1
    assert controller.stat_for("word-2") is None


def test_record_answer_persists(controller, kv_store):
    stat = controller.record_answer("word-1", Quality.GOOD)

    assert stat.repetitions == 1
    assert stat.last_reviewed_at == NOW
    assert controller.last_save_succeeded is True
    assert json.loads(kv_store.get("test.srs"))["word-1"]["reps"] == 1


def test_record_answer_builds_on_previous_stat(controller):
    controller.record_answer("word-1", 4)
    controller.record_answer("word-1", 4)
    stat = controller.record_answer("word-1", 4)

    assert stat.repetitions == 3
    assert stat.interval_days == 15


def test_stats_snapshot_is_a_copy(controller):
    controller.record_answer("word-1", 4)
    snapshot = controller.stats
    snapshot.clear()
    assert "word-1" in controller.stats


def test_save_failure_keeps_stat_in_memory():
    kv = MagicMock()
    kv.get.return_value = None
    kv.set.side_effect = StorageError("down")
    controller = ReviewController(ReviewStatRepository(kv, key="k"), session_store=SessionStore(), clock=lambda: NOW)

    stat = controller.record_answer("word-1", 5)

    assert controller.last_save_succeeded is False
    assert controller.stat_for("word-1") == stat


def test_start_session_orders_due_fresh_other(controller, items):
    controller.record_answer(items[0].id, 4, now=NOW - 2 * DAY_MS)  # due yesterday
    controller.record_answer(items[1].id, 4, now=NOW)  # due tomorrow

    session = controller.start_session(items, target_count=10, deck_id="deck-1")

    ids = [item.id for item in session.items]
    assert ids[0] == items[0].id
    assert ids[-1] == items[1].id
    assert len(ids) == 10
    assert controller.current_session("deck-1") is session


def test_start_session_uses_configured_size(monkeypatch, controller, items):
    monkeypatch.setenv("DRILL_SESSION_SIZE", "4")
    session = controller.start_session(items)
    assert len(session.items) == 4


def test_start_session_with_empty_pool(controller):
    session = controller.start_session([], target_count=5)
    assert session.items == ()
    assert session.finished is True


def test_answer_current_records_and_marks(controller, items):
    session = controller.start_session(items, target_count=2)
    first = session.current_item

    stat = controller.answer_current(Quality.AGAIN)

    assert stat.repetitions == 0
    assert controller.stat_for(first.id) == stat
    assert session.answered is True
    assert session.correct_count == 0
    assert controller.answer_current(Quality.GOOD) is None

    session.move_next()
    controller.answer_current(Quality.GOOD)
    assert session.correct_count == 1

    session.move_next()
    assert session.finished is True
    assert controller.answer_current(Quality.GOOD) is None


class SlowKeyValueStore(MemoryKeyValueStore):
    """Memory store whose writes take a while, to widen race windows."""

    def set(self, key, value):
        time.sleep(0.05)
        super().set(key, value)


def test_concurrent_answers_to_one_position_count_once(items):
    repo = ReviewStatRepository(SlowKeyValueStore(), key="test.srs")
    controller = ReviewController(repo, session_store=SessionStore(), rng=SeededRandom(1), clock=lambda: NOW)
    session = controller.start_session(items, target_count=3)
    first = session.current_item
    barrier = threading.Barrier(2)
    results = []

    def answer():
        barrier.wait()
        results.append(controller.answer_current(Quality.GOOD))

    threads = [threading.Thread(target=answer) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(result is not None for result in results) == 1
    assert controller.stat_for(first.id).repetitions == 1
    assert session.correct_count == 1


def test_answer_current_without_session(controller):
    assert controller.answer_current(Quality.GOOD, deck_id="missing") is None


def test_summary(controller, items):
    controller.record_answer(items[0].id, 4, now=NOW - 2 * DAY_MS)
    controller.record_answer(items[1].id, 4, now=NOW)

    summary = controller.summary(items)

    assert summary.due_count == 1
    assert summary.new_count == 8
    assert summary.total_count == 10


def test_reset_clears_memory_and_storage(controller, kv_store):
    controller.record_answer("word-1", 4)

    assert controller.reset() is True

    assert controller.stats == {}
    assert kv_store.get("test.srs") is None


def test_controller_uses_singleton_session_store(repository):
    controller = ReviewController(repository, clock=lambda: NOW)
    other = ReviewController(ReviewStatRepository(MemoryKeyValueStore(), key="other"), clock=lambda: NOW)
    controller.start_session([], target_count=1)
    assert other.current_session() is not None
