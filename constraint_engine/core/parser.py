"""
Syntax-tree hook — tree-sitter parsers for languages with a bundled grammar.

Structural rules normally get by with the regex queries on ValidationContext.
Rules that need precision can ask the context for a real tree instead.
"""

from __future__ import annotations

from functools import lru_cache

import tree_sitter_python as tspython
from tree_sitter import Language, Parser, Tree


GRAMMARS: dict[str, Language] = {
    "python": Language(tspython.language()),
}


class SourceParser:
    """Thin wrapper around a tree-sitter parser for one language."""

    def __init__(self, language: str) -> None:
        self.language = language
        self._parser = Parser(GRAMMARS[language])

    def parse(self, code: str) -> tuple[Tree, bytes]:
        """Parse source and return (tree, source_bytes).

        Raises ValueError if the code cannot be parsed.
        """
        source_bytes = code.encode("utf-8")
        tree = self._parser.parse(source_bytes)
        if tree.root_node.has_error:
            raise ValueError(f"Failed to parse {self.language} source code")
        return tree, source_bytes


@lru_cache
def get_parser(language: str) -> SourceParser | None:
    """Shared parser for a language, or None when no grammar is bundled."""
    if language not in GRAMMARS:
        return None
    return SourceParser(language)
