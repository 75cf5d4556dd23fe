"""
Must Extend BaseActionPlugin — every `*Plugin` class inherits the plugin base.
"""

from __future__ import annotations

import re

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation

RULE_ID = "must-extend-base-plugin"

PLUGIN_FILES = r"src/plugins/.*\.plugin\.ts$"

_PLUGIN_CLASS_RE = re.compile(r"\bclass\s+(\w+Plugin)\b([^{]*)\{")


def check(context: ValidationContext) -> list[Violation]:
    """Flag plugin classes whose heritage clause lacks BaseActionPlugin."""
    violations: list[Violation] = []

    for match in _PLUGIN_CLASS_RE.finditer(context.content):
        class_name, heritage = match.group(1), match.group(2)
        if re.search(r"\bextends\s+BaseActionPlugin\b", heritage):
            continue
        violations.append(
            create_violation(
                RULE_ID,
                Severity.ERROR,
                f"Plugin class '{class_name}' must extend BaseActionPlugin",
                context,
                suggestion='Add "extends BaseActionPlugin" to your plugin class declaration',
                line=context.content.count("\n", 0, match.start()) + 1,
            )
        )

    return violations


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("Must Extend BaseActionPlugin")
    .description("All plugin classes must extend BaseActionPlugin")
    .severity("error")
    .category("architecture")
    .tags("plugins", "inheritance")
    .file_pattern(PLUGIN_FILES)
    .validate(check)
)
