"""
No Hardcoded Secrets — credential-looking assignments with literal values.
"""

from __future__ import annotations

import re

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation

RULE_ID = "no-hardcoded-secrets"

_SECRET_RE = re.compile(
    r"""(?:api_?key|password|secret|token)\s*[:=]\s*['"][^'"\n]{8,}['"]""",
    re.IGNORECASE,
)


def check(context: ValidationContext) -> list[Violation]:
    return [
        create_violation(
            RULE_ID,
            Severity.ERROR,
            "Potential hardcoded secret detected",
            context,
            suggestion="Use environment variables or configuration service for secrets",
            line=m.line,
            column=m.column,
        )
        for m in context.find_matches(_SECRET_RE)
    ]


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("No Hardcoded Secrets")
    .description("No hardcoded secrets or credentials")
    .severity("error")
    .category("security")
    .tags("security", "secrets")
    .file_pattern(r"\.(?:ts|js)$")
    .exclude_pattern(r"\.spec\.ts$")
    .exclude_pattern(r"(?:^|/)test/")
    .validate(check)
)
