"""Pytest configuration and fixtures."""

import os

import pytest

# Keep tests off any real storage by default
os.environ.setdefault("DRILL_STORAGE_BACKEND", "memory")

from vocab_drill.config import get_settings  # noqa: E402
from vocab_drill.db import MemoryKeyValueStore  # noqa: E402
from vocab_drill.models import Item  # noqa: E402
from vocab_drill.repositories import ReviewStatRepository, reset_review_stat_repository  # noqa: E402
from vocab_drill.sessions import reset_session_store  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_singletons():
    """Drop cached settings and singletons around every test."""
    get_settings.cache_clear()
    reset_session_store()
    reset_review_stat_repository()
    yield
    get_settings.cache_clear()
    reset_session_store()
    reset_review_stat_repository()


@pytest.fixture
def kv_store():
    return MemoryKeyValueStore()


@pytest.fixture
def repository(kv_store):
    return ReviewStatRepository(kv_store, key="test.srs")


@pytest.fixture
def items():
    """Ten items with ordinals 1..10."""
    return [Item(id=f"word-{n}", ordinal=n, content={"lemma": f"lemma {n}"}) for n in range(1, 11)]
