"""
Validation Helpers — pure text-matching utilities shared by rules and contexts.

None of these parse source code. Class, method and import extraction are
regex approximations that cover common TypeScript/JavaScript and Python
layouts.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Union

from constraint_engine.models.rule_models import Severity, Violation

if TYPE_CHECKING:
    from constraint_engine.models.context_models import ValidationContext

TextPattern = Union[str, "re.Pattern[str]"]

_CLASS_RE = re.compile(r"\bclass\s+([A-Za-z_$][\w$]*)")

# Brace-bodied methods/functions (TS/JS) and `def` functions (Python)
_METHOD_RE = re.compile(
    r"(?:\basync\s+)?([A-Za-z_$][\w$]*)\s*\([^)]*\)[ \t]*(?::[ \t]*[^{;\n]+)?\s*\{"
    r"|^[ \t]*(?:async[ \t]+)?def[ \t]+(\w+)[ \t]*\(",
    re.MULTILINE,
)
_CONTROL_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "with", "return", "function"})

_IMPORT_RE = re.compile(
    r"""\bimport\s+(?:[\w*{}\s,$]+?\s+from\s+)?['"]([^'"]+)['"]"""
    r"""|\brequire\(\s*['"]([^'"]+)['"]\s*\)"""
    r"""|^[ \t]*from[ \t]+([\w.]+)[ \t]+import\b"""
    r"""|^[ \t]*import[ \t]+([\w.]+)(?=[ \t]*(?:$|,|as[ \t]|#|;))""",
    re.MULTILINE,
)


@dataclass(frozen=True)
class PatternMatch:
    """One regex hit located by 1-based line and column."""

    match: str
    line: int
    column: int


def contains(content: str, pattern: TextPattern) -> bool:
    """Strings are literal substrings; compiled patterns are searched."""
    if isinstance(pattern, str):
        return pattern in content
    return pattern.search(content) is not None


def find_matches(content: str, pattern: TextPattern) -> list[PatternMatch]:
    """
    Find every match, scanning each line independently.

    Matches never span lines. A plain string is matched literally.
    """
    regex = re.compile(re.escape(pattern)) if isinstance(pattern, str) else pattern
    matches: list[PatternMatch] = []
    for line_no, line in enumerate(content.split("\n"), start=1):
        for m in regex.finditer(line):
            matches.append(PatternMatch(match=m.group(0), line=line_no, column=m.start() + 1))
    return matches


def matches_any_pattern(file_path: str | PurePath, patterns: Iterable[re.Pattern[str]]) -> bool:
    """True if any pattern is found anywhere in the (forward-slash) path."""
    path = _normalize_path(file_path)
    return any(p.search(path) for p in patterns)


def extract_classes(content: str) -> list[str]:
    return [m.group(1) for m in _CLASS_RE.finditer(content)]


def extract_methods(content: str) -> list[str]:
    methods: list[str] = []
    for m in _METHOD_RE.finditer(content):
        name = m.group(1) or m.group(2)
        if name and name not in _CONTROL_KEYWORDS:
            methods.append(name)
    return methods


def extract_imports(content: str) -> list[str]:
    """Module specifiers from ES imports, require() calls and Python imports."""
    return [next(g for g in m.groups() if g) for m in _IMPORT_RE.finditer(content)]


def has_decorator(content: str, name: TextPattern) -> bool:
    """
    `@Name` followed by anything but another identifier character.

    Matches `@Injectable()` and `@dataclass`, not `@InjectableFactory`.
    """
    source, flags = _pattern_parts(name)
    return re.search(rf"@(?:{source})(?![\w.$])", content, flags) is not None


def has_interface(content: str, name: TextPattern) -> bool:
    """An `interface Name` or `type Name` declaration."""
    source, flags = _pattern_parts(name)
    return re.search(rf"\b(?:interface|type)\s+(?:{source})\b", content, flags) is not None


def create_violation(
    rule_id: str,
    severity: Severity | str,
    message: str,
    context: ValidationContext,
    *,
    suggestion: str | None = None,
    line: int | None = None,
    column: int | None = None,
    source: str | None = None,
) -> Violation:
    """Build a Violation attributed to the context's file display name."""
    return Violation(
        rule_id=rule_id,
        severity=Severity(severity),
        message=message,
        file=context.file,
        suggestion=suggestion,
        line=line,
        column=column,
        source=source,
    )


def _normalize_path(file_path: str | PurePath) -> str:
    return str(file_path).replace("\\", "/")


def _pattern_parts(name: TextPattern) -> tuple[str, int]:
    # Compiled patterns keep their flags when embedded in a larger regex
    if isinstance(name, re.Pattern):
        return name.pattern, name.flags
    return re.escape(name), 0
