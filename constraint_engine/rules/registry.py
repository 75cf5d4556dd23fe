"""
Rule Registry — built-in rule sets and loading of user rule modules.

A user rule module is any Python file exposing either ``RULES`` (a list of
Rule) or ``RULE_SET`` (a RuleSet).
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from constraint_engine.core.errors import ConfigurationError
from constraint_engine.models.rule_models import Rule, RuleSet
from constraint_engine.rules import plugin_rules

logger = logging.getLogger("constraint_engine.rules")

# Registry of built-in rule sets
RULE_SETS: dict[str, RuleSet] = {
    plugin_rules.RULE_SET.name: plugin_rules.RULE_SET,
}


def get_rule_set(name: str) -> RuleSet:
    if name not in RULE_SETS:
        raise KeyError(f"Unknown rule set: {name}")
    return RULE_SETS[name]


def load_rules_module(path: str | Path) -> RuleSet:
    """
    Import a rules file and return its rules as a RuleSet.

    Raises ConfigurationError if the file is missing or exports no rules.
    Errors raised while executing the module itself propagate unchanged.
    """
    module_path = Path(path).resolve()
    if not module_path.is_file():
        raise ConfigurationError(f"Rules file not found: {module_path}")

    spec = importlib.util.spec_from_file_location(f"_constraint_rules_{module_path.stem}", module_path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot import rules file: {module_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    rule_set = getattr(module, "RULE_SET", None)
    if isinstance(rule_set, RuleSet):
        return rule_set

    rules = getattr(module, "RULES", None)
    if isinstance(rules, (list, tuple)) and all(isinstance(r, Rule) for r in rules):
        logger.debug(f"Loaded {len(rules)} rules from {module_path}")
        return RuleSet(name=module_path.stem, rules=tuple(rules))

    raise ConfigurationError(
        f"{module_path.name} must define RULES (list of Rule) or RULE_SET (RuleSet)"
    )
