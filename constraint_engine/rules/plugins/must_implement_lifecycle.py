"""
Must Implement Lifecycle — plugins expose `async execute()` and
`async healthCheck()`.
"""

from __future__ import annotations

import re

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation
from constraint_engine.rules.plugins.must_extend_base_plugin import PLUGIN_FILES

RULE_ID = "must-implement-lifecycle"

# method name -> suggested stub
LIFECYCLE_METHODS = {
    "execute": "async execute(input: any): Promise<any> { ... }",
    "healthCheck": "async healthCheck(): Promise<boolean> { return true; }",
}


def check(context: ValidationContext) -> list[Violation]:
    if not context.has_class(r"Plugin$"):
        return []

    violations: list[Violation] = []
    for method, stub in LIFECYCLE_METHODS.items():
        if not context.contains(re.compile(rf"\basync\s+{method}\s*\(")):
            violations.append(
                create_violation(
                    RULE_ID,
                    Severity.ERROR,
                    f"Plugin must implement async {method} method",
                    context,
                    suggestion=f"Add: {stub}",
                )
            )
    return violations


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("Must Implement Lifecycle Methods")
    .description("Plugins must implement async execute and healthCheck methods")
    .severity("error")
    .category("architecture")
    .tags("plugins", "lifecycle")
    .file_pattern(PLUGIN_FILES)
    .validate(check)
)
