"""
Must Have Metadata — plugins declare `readonly metadata: PluginMetadata` with
all required fields and a known category.
"""

from __future__ import annotations

import re

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation
from constraint_engine.rules.plugins.must_extend_base_plugin import PLUGIN_FILES

RULE_ID = "must-have-metadata"

REQUIRED_FIELDS = ("name", "version", "description", "author", "category")
VALID_CATEGORIES = ("business", "utility", "integration", "auth")

_CATEGORY_RE = re.compile(r"""category:\s*['"]([^'"]+)['"]""")


def check(context: ValidationContext) -> list[Violation]:
    violations: list[Violation] = []

    if not context.contains("readonly metadata: PluginMetadata"):
        violations.append(
            create_violation(
                RULE_ID,
                Severity.ERROR,
                'Plugin must have "readonly metadata: PluginMetadata" property',
                context,
                suggestion='Add: readonly metadata: PluginMetadata = { name: "...", version: "...", ... }',
            )
        )

    missing = [f for f in REQUIRED_FIELDS if not context.contains(f"{f}:")]
    if missing:
        violations.append(
            create_violation(
                RULE_ID,
                Severity.ERROR,
                f"Plugin metadata missing required fields: {', '.join(missing)}",
                context,
                suggestion=f"Add missing fields to metadata: {', '.join(missing)}",
            )
        )

    for match in context.find_matches(_CATEGORY_RE):
        category = _CATEGORY_RE.match(match.match).group(1)
        if category not in VALID_CATEGORIES:
            violations.append(
                create_violation(
                    RULE_ID,
                    Severity.ERROR,
                    f"Invalid category '{category}'. Must be one of: {', '.join(VALID_CATEGORIES)}",
                    context,
                    suggestion=f"Use valid category: {', '.join(VALID_CATEGORIES)}",
                    line=match.line,
                    column=match.column,
                )
            )

    return violations


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("Must Have Metadata Property")
    .description("Plugins must define a complete readonly metadata property")
    .severity("error")
    .category("architecture")
    .tags("plugins", "metadata")
    .file_pattern(PLUGIN_FILES)
    .validate(check)
)
