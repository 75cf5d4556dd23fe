"""
FastAPI Dependencies — injected via Depends().
"""

from __future__ import annotations

from fastapi import HTTPException

from constraint_engine.core.engine import ValidationEngine
from constraint_engine.models.result_models import EngineOptions
from constraint_engine.models.rule_models import RuleSet
from constraint_engine.rules.registry import RULE_SETS, get_rule_set


def get_rule_sets() -> dict[str, RuleSet]:
    """Built-in rule sets available to requests."""
    return RULE_SETS


def build_engine(rule_set_name: str) -> ValidationEngine:
    """
    Fresh engine per request so rules and stats never leak between calls.

    Raises 404 for an unknown rule set.
    """
    try:
        rule_set = get_rule_set(rule_set_name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown rule set: {rule_set_name}")
    engine = ValidationEngine(EngineOptions.from_settings(enable_cache=False))
    engine.add_rule_set(rule_set)
    return engine
