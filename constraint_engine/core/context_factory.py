"""
Context Factory — builds a ValidationContext from raw file content.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Any

from constraint_engine.models.context_models import UNKNOWN_LANGUAGE, ValidationContext

LANGUAGE_MAP: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".rb": "ruby",
    ".java": "java",
    ".kt": "kotlin",
    ".go": "go",
    ".rs": "rust",
}


def detect_language(file_path: str | PurePath) -> str:
    """Map the lowercased extension to a language tag. Never raises."""
    suffix = PurePath(str(file_path)).suffix.lower()
    return LANGUAGE_MAP.get(suffix, UNKNOWN_LANGUAGE)


def create_context(
    file_path: str | PurePath,
    content: str,
    project_root: str | PurePath = ".",
    metadata: dict[str, Any] | None = None,
) -> ValidationContext:
    path = str(file_path)
    return ValidationContext(
        file=PurePath(path).name or path,
        file_path=path,
        content=content,
        project_root=str(project_root),
        language=detect_language(path),
        metadata=dict(metadata or {}),
    )
