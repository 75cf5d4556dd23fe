"""
Must Have Injectable Decorator — plugins are resolved through NestJS DI.
"""

from __future__ import annotations

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation
from constraint_engine.rules.plugins.must_extend_base_plugin import PLUGIN_FILES

RULE_ID = "must-have-injectable-decorator"


def check(context: ValidationContext) -> list[Violation]:
    if context.has_class(r"Plugin$") and not context.has_decorator("Injectable"):
        return [
            create_violation(
                RULE_ID,
                Severity.ERROR,
                "Plugin class must have @Injectable() decorator",
                context,
                suggestion="Add @Injectable() decorator above your plugin class",
            )
        ]
    return []


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("Must Have Injectable Decorator")
    .description("Plugin classes must have @Injectable() decorator")
    .severity("error")
    .category("architecture")
    .tags("plugins", "decorators", "nestjs")
    .file_pattern(PLUGIN_FILES)
    .validate(check)
)
