"""
Result Cache — SHA-256 content-hash based reuse of per-file violations.

An entry is only valid for the exact content and the rule-set generation it
was computed under; the engine bumps the generation whenever its rules change.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass, field
from typing import Any

from constraint_engine.config import settings
from constraint_engine.models.rule_models import Violation

logger = logging.getLogger("constraint_engine.cache")


@dataclass
class CacheEntry:
    """Violations previously computed for one file's content."""

    content_hash: str
    generation: int
    violations: tuple[Violation, ...]
    timestamp: float = field(default_factory=time.time)

    @property
    def is_expired(self) -> bool:
        return (time.time() - self.timestamp) > settings.cache_ttl_seconds


class ResultCache:
    """
    In-memory result cache keyed by file path and SHA-256 of content.

    No staleness detection beyond content and rule-set changes: rules that
    look at other files (e.g. a companion test file) may see old answers.
    """

    def __init__(self) -> None:
        self._store: dict[str, CacheEntry] = {}

    @staticmethod
    def hash_content(content: str) -> str:
        """Compute SHA-256 hash of file content."""
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    def get(self, file_path: str, content: str, generation: int) -> CacheEntry | None:
        """
        Look up cached violations for a file.

        Returns None if not cached, expired, computed under another rule
        generation, or the content has changed.
        """
        key = f"{file_path}:{self.hash_content(content)}"
        entry = self._store.get(key)

        if entry is None:
            return None

        if entry.is_expired or entry.generation != generation:
            del self._store[key]
            return None

        return entry

    def put(
        self,
        file_path: str,
        content: str,
        generation: int,
        violations: tuple[Violation, ...],
    ) -> None:
        """Cache the violations computed for a file."""
        content_hash = self.hash_content(content)
        self._store[f"{file_path}:{content_hash}"] = CacheEntry(
            content_hash=content_hash,
            generation=generation,
            violations=violations,
        )

    def clear(self) -> None:
        """Clear all cached entries."""
        if self._store:
            logger.debug(f"Clearing {len(self._store)} cached results")
        self._store.clear()

    @property
    def size(self) -> int:
        """Number of cached entries."""
        return len(self._store)

    def stats(self) -> dict[str, Any]:
        """Cache statistics."""
        expired = sum(1 for e in self._store.values() if e.is_expired)
        return {
            "total_entries": len(self._store),
            "expired_entries": expired,
            "active_entries": len(self._store) - expired,
        }
