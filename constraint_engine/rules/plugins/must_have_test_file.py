"""
Must Have Test File — each `x.plugin.ts` ships with `x.plugin.spec.ts`.

The only rule in the pack that touches the filesystem, so it is async.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.rule_models import Severity, Violation
from constraint_engine.rules.plugins.must_extend_base_plugin import PLUGIN_FILES

RULE_ID = "must-have-test-file"


def companion_test_path(file_path: str) -> Path:
    path = Path(file_path)
    return path.with_name(path.name.replace(".plugin.ts", ".plugin.spec.ts"))


async def check(context: ValidationContext) -> list[Violation]:
    test_path = companion_test_path(context.file_path)
    if await asyncio.to_thread(test_path.exists):
        return []
    return [
        create_violation(
            RULE_ID,
            Severity.WARNING,
            f"Missing test file: {test_path.name}",
            context,
            suggestion="Create corresponding test file for your plugin",
        )
    ]


RULE = (
    create_rule()
    .id(RULE_ID)
    .name("Must Have Test File")
    .description("Every plugin must have a companion .spec.ts test file")
    .severity("warning")
    .category("testing")
    .tags("plugins", "testing")
    .file_pattern(PLUGIN_FILES)
    .validate(check)
)
