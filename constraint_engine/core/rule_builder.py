r"""
Rule Builder — fluent construction of immutable Rule values.

    rule = (
        create_rule()
        .id("no-console-logging")
        .name("No Console Logging")
        .description("Use the Logger service instead of console")
        .severity("warning")
        .file_pattern(r"\.plugin\.ts$")
        .validate(check)
    )

Nothing is checked until the terminal `validate()` call, so a partially
configured builder can never end up registered with an engine.
"""

from __future__ import annotations

import re
from typing import Any

from constraint_engine.core.errors import ConfigurationError
from constraint_engine.core.helpers import TextPattern
from constraint_engine.models.rule_models import Rule, RuleValidator, Severity

REQUIRED_FIELDS = ("id", "name", "description")


class RuleBuilder:
    """Accumulates rule fields into a draft and materializes a Rule."""

    def __init__(self) -> None:
        self._draft: dict[str, Any] = {}
        self._tags: list[str] = []
        self._file_patterns: list[re.Pattern[str]] = []
        self._exclude_patterns: list[re.Pattern[str]] = []

    def id(self, rule_id: str) -> RuleBuilder:
        self._draft["id"] = rule_id
        return self

    def name(self, name: str) -> RuleBuilder:
        self._draft["name"] = name
        return self

    def description(self, description: str) -> RuleBuilder:
        self._draft["description"] = description
        return self

    def severity(self, severity: Severity | str) -> RuleBuilder:
        try:
            self._draft["severity"] = Severity(severity)
        except ValueError:
            allowed = ", ".join(s.value for s in Severity)
            raise ConfigurationError(
                f"Invalid severity {severity!r}; expected one of: {allowed}"
            ) from None
        return self

    def category(self, category: str) -> RuleBuilder:
        self._draft["category"] = category
        return self

    def tags(self, *tags: str) -> RuleBuilder:
        self._tags.extend(tags)
        return self

    def file_pattern(self, pattern: TextPattern) -> RuleBuilder:
        """Append an include pattern (regex source or compiled regex)."""
        self._file_patterns.append(_compile(pattern))
        return self

    def exclude_pattern(self, pattern: TextPattern) -> RuleBuilder:
        """Append an exclude pattern; excludes win over includes."""
        self._exclude_patterns.append(_compile(pattern))
        return self

    def validate(self, validator: RuleValidator) -> Rule:
        """Attach the validate function and build the Rule."""
        missing = [f for f in REQUIRED_FIELDS if not self._draft.get(f)]
        if missing:
            raise ConfigurationError.missing(missing)
        if not callable(validator):
            raise ConfigurationError(f"Rule '{self._draft['id']}' validator is not callable")

        return Rule(
            id=self._draft["id"],
            name=self._draft["name"],
            description=self._draft["description"],
            severity=self._draft.get("severity", Severity.WARNING),
            category=self._draft.get("category") or "general",
            tags=frozenset(self._tags),
            file_patterns=tuple(self._file_patterns),
            exclude_patterns=tuple(self._exclude_patterns),
            validate_fn=validator,
        )


def create_rule() -> RuleBuilder:
    """Start building a rule."""
    return RuleBuilder()


def _compile(pattern: TextPattern) -> re.Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as e:
        raise ConfigurationError(f"Invalid file pattern {pattern!r}: {e}") from e
