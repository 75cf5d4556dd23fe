"""
Rule Data Models — Severities, violations, rules and rule sets.

Rules are plain in-memory values: an id, descriptive metadata, path filters
and a validate function mapping a ValidationContext to a list of Violations.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from constraint_engine.models.context_models import ValidationContext


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


# Escalation order: error > warning > info
SEVERITY_RANK: dict[Severity, int] = {
    Severity.ERROR: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
}


def highest_severity(violations: Iterable[Violation]) -> Severity | None:
    """Return the most severe level present, or None for an empty list."""
    levels = [v.severity for v in violations]
    if not levels:
        return None
    return max(levels, key=lambda s: SEVERITY_RANK[s])


class Violation(BaseModel):
    """A single finding produced by a rule's validate function."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(..., min_length=1, description="Id of the rule that produced it")
    severity: Severity
    message: str = Field(..., description="Human-readable finding")
    file: str = Field(..., description="File path or display name")
    suggestion: str | None = Field(default=None, description="Optional remediation hint")
    line: int | None = Field(default=None, ge=1, description="1-based line")
    column: int | None = Field(default=None, ge=1, description="1-based column")
    source: str | None = Field(default=None, description="Offending source snippet")


# A rule's validate function. May be a coroutine function for rules that
# need to await I/O (e.g. checking for a companion file).
RuleValidator = Callable[
    ["ValidationContext"],
    Union[list[Violation], Awaitable[list[Violation]]],
]


class Rule(BaseModel):
    """An immutable constraint rule definition."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    severity: Severity = Severity.WARNING
    category: str = "general"
    tags: frozenset[str] = Field(default_factory=frozenset)
    # Empty means "apply to every file"
    file_patterns: tuple[re.Pattern[str], ...] = ()
    exclude_patterns: tuple[re.Pattern[str], ...] = ()
    validate_fn: Callable[..., Any] = Field(..., exclude=True, repr=False)

    def validate(self, context: ValidationContext) -> Any:
        """Run the rule against a context. May return an awaitable."""
        return self.validate_fn(context)

    def describe(self) -> dict[str, Any]:
        """JSON-friendly metadata (everything but the validate function)."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "severity": self.severity.value,
            "category": self.category,
            "tags": sorted(self.tags),
            "file_patterns": [p.pattern for p in self.file_patterns],
            "exclude_patterns": [p.pattern for p in self.exclude_patterns],
        }


class RuleSet(BaseModel):
    """A named, versioned collection of rules."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1)
    version: str = "1.0.0"
    description: str = ""
    rules: tuple[Rule, ...] = ()
