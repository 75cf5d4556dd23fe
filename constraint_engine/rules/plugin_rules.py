"""
NestJS plugin architecture rule set.
"""

from __future__ import annotations

from constraint_engine.models.rule_models import RuleSet
from constraint_engine.rules.plugins import (
    must_extend_base_plugin,
    must_have_injectable_decorator,
    must_have_metadata,
    must_have_test_file,
    must_implement_lifecycle,
    no_console_logging,
    no_hardcoded_secrets,
)

RULE_SET = RuleSet(
    name="plugin_rules",
    version="1.0.0",
    description="Structural conventions for NestJS action plugins",
    rules=(
        must_extend_base_plugin.RULE,
        must_have_injectable_decorator.RULE,
        must_have_metadata.RULE,
        must_implement_lifecycle.RULE,
        no_console_logging.RULE,
        no_hardcoded_secrets.RULE,
        must_have_test_file.RULE,
    ),
)
