"""
No Console Logging — plugins log through the NestJS Logger service.
"""

from __future__ import annotations

import re

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation
from constraint_engine.rules.plugins.must_extend_base_plugin import PLUGIN_FILES

RULE_ID = "no-console-logging"

_CONSOLE_RE = re.compile(r"console\.(?:log|warn|error|debug|info)")


def check(context: ValidationContext) -> list[Violation]:
    return [
        create_violation(
            RULE_ID,
            Severity.WARNING,
            f"Avoid {m.match} - use Logger service instead",
            context,
            suggestion="Import Logger from @nestjs/common and use proper logging",
            line=m.line,
            column=m.column,
            source=m.match,
        )
        for m in context.find_matches(_CONSOLE_RE)
    ]


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("No Console Logging")
    .description("Use Logger service instead of console")
    .severity("warning")
    .category("maintainability")
    .tags("plugins", "logging")
    .file_pattern(PLUGIN_FILES)
    .exclude_pattern(r"\.spec\.ts$")
    .validate(check)
)
