"""Tests for environment-driven drill settings."""

import pytest

from vocab_drill.config import DEFAULT_SESSION_SIZE, DEFAULT_STATS_KEY, get_settings

ENV_VARS = (
    "DRILL_STORAGE_BACKEND",
    "DRILL_STORAGE_DIR",
    "DRILL_STATS_KEY",
    "DRILL_SESSION_SIZE",
    "DRILL_SESSION_TTL_SECONDS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    return monkeypatch


def test_defaults(clean_env):
    settings = get_settings()

    assert settings.storage_backend == "memory"
    assert settings.storage_dir == ".drill"
    assert settings.stats_key == DEFAULT_STATS_KEY
    assert settings.session_size == DEFAULT_SESSION_SIZE
    assert settings.session_ttl_seconds == 30 * 60


def test_values_from_environment(clean_env):
    clean_env.setenv("DRILL_STORAGE_BACKEND", "File")
    clean_env.setenv("DRILL_STORAGE_DIR", "/tmp/drill")
    clean_env.setenv("DRILL_STATS_KEY", "other.key")
    clean_env.setenv("DRILL_SESSION_SIZE", "25")
    clean_env.setenv("DRILL_SESSION_TTL_SECONDS", "120")

    settings = get_settings()

    assert settings.storage_backend == "file"
    assert settings.storage_dir == "/tmp/drill"
    assert settings.stats_key == "other.key"
    assert settings.session_size == 25
    assert settings.session_ttl_seconds == 120


@pytest.mark.parametrize("raw", ["ten", "0", "-5", " "])
def test_bad_session_size_falls_back(clean_env, raw):
    clean_env.setenv("DRILL_SESSION_SIZE", raw)
    assert get_settings().session_size == DEFAULT_SESSION_SIZE


def test_unknown_backend_raises(clean_env):
    clean_env.setenv("DRILL_STORAGE_BACKEND", "redis")
    with pytest.raises(ValueError):
        get_settings()


def test_settings_are_cached(clean_env):
    assert get_settings() is get_settings()
