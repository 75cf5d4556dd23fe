"""
Validation Context — the per-file view that rules consume.

Structural queries (classes, methods, imports, decorators, interfaces) are
lightweight regular-expression scans, not a parse. They are best-effort and
can miss or over-report on unusual formatting (multi-line signatures, matches
inside strings or comments, re-exports). `syntax_tree()` is the hook for rules
that need a real parse.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from constraint_engine.core import helpers
from constraint_engine.core.helpers import PatternMatch, TextPattern

UNKNOWN_LANGUAGE = "unknown"


class ValidationContext(BaseModel):
    """Raw content of one file plus derived read-only queries."""

    model_config = ConfigDict(frozen=True)

    file: str = Field(..., description="Display name (base name of file_path)")
    file_path: str = Field(..., description="Absolute or display path")
    content: str
    project_root: str = "."
    language: str = UNKNOWN_LANGUAGE
    metadata: dict[str, Any] = Field(default_factory=dict)

    def contains(self, pattern: TextPattern) -> bool:
        """Literal substring (str) or regex (compiled pattern) containment."""
        return helpers.contains(self.content, pattern)

    def find_matches(self, pattern: TextPattern) -> list[PatternMatch]:
        return helpers.find_matches(self.content, pattern)

    def has_class(self, pattern: TextPattern) -> bool:
        regex = _as_regex(pattern)
        return any(regex.search(name) for name in helpers.extract_classes(self.content))

    def has_method(self, pattern: TextPattern) -> bool:
        regex = _as_regex(pattern)
        return any(regex.search(name) for name in helpers.extract_methods(self.content))

    def has_import(self, pattern: TextPattern) -> bool:
        regex = _as_regex(pattern)
        return any(regex.search(spec) for spec in helpers.extract_imports(self.content))

    def has_decorator(self, name: TextPattern) -> bool:
        return helpers.has_decorator(self.content, name)

    def has_interface(self, name: TextPattern) -> bool:
        return helpers.has_interface(self.content, name)

    def get_classes(self) -> list[str]:
        return helpers.extract_classes(self.content)

    def get_methods(self) -> list[str]:
        return helpers.extract_methods(self.content)

    def get_imports(self) -> list[str]:
        return helpers.extract_imports(self.content)

    def syntax_tree(self) -> Any:
        """
        Parse the content into a tree-sitter tree.

        Returns None for languages without a registered grammar.
        Raises ValueError if the content cannot be parsed.
        """
        from constraint_engine.core.parser import get_parser

        parser = get_parser(self.language)
        if parser is None:
            return None
        tree, _ = parser.parse(self.content)
        return tree


def _as_regex(pattern: TextPattern) -> re.Pattern[str]:
    # Name queries treat plain strings as regular expressions
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)
