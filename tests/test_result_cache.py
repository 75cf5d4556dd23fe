"""
Tests for the per-file result cache.
"""

from constraint_engine.cache.result_cache import ResultCache
from constraint_engine.config import settings
from constraint_engine.models.rule_models import Severity, Violation


def _violations():
    return (Violation(rule_id="r", severity=Severity.WARNING, message="m", file="a.ts"),)


def test_hash_content_is_stable():
    assert ResultCache.hash_content("abc") == ResultCache.hash_content("abc")
    assert ResultCache.hash_content("abc") != ResultCache.hash_content("abd")


def test_put_and_get():
    cache = ResultCache()
    cache.put("a.ts", "content", 1, _violations())
    entry = cache.get("a.ts", "content", 1)
    assert entry is not None
    assert entry.violations == _violations()
    assert cache.size == 1


def test_changed_content_misses():
    cache = ResultCache()
    cache.put("a.ts", "content", 1, _violations())
    assert cache.get("a.ts", "other content", 1) is None


def test_other_generation_is_dropped():
    cache = ResultCache()
    cache.put("a.ts", "content", 1, _violations())
    assert cache.get("a.ts", "content", 2) is None
    assert cache.size == 0


def test_expired_entry_is_dropped(monkeypatch):
    cache = ResultCache()
    cache.put("a.ts", "content", 1, _violations())
    monkeypatch.setattr(settings, "cache_ttl_seconds", -1)
    assert cache.stats()["expired_entries"] == 1
    assert cache.get("a.ts", "content", 1) is None
    assert cache.size == 0


def test_stats_and_clear():
    cache = ResultCache()
    cache.put("a.ts", "one", 1, ())
    cache.put("a.ts", "two", 1, ())
    cache.put("b.ts", "one", 1, ())
    assert cache.stats() == {"total_entries": 3, "expired_entries": 0, "active_entries": 3}
    cache.clear()
    assert cache.size == 0
