"""
Validate Routes — POST /validate, GET /rules

Runs a built-in rule set over submitted file contents. Nothing is read from
the server's filesystem except by rules that check companion files.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from constraint_engine.api.dependencies import build_engine, get_rule_sets
from constraint_engine.config import settings
from constraint_engine.core import reporting
from constraint_engine.models.api_models import ValidateRequest
from constraint_engine.models.result_models import ValidationReport
from constraint_engine.models.rule_models import RuleSet

logger = logging.getLogger("constraint_engine.api.validate")

router = APIRouter()


@router.get("/rules")
async def list_rules(rule_sets: dict[str, RuleSet] = Depends(get_rule_sets)):
    """Metadata for every built-in rule, grouped by rule set."""
    return {
        name: {
            "version": rule_set.version,
            "description": rule_set.description,
            "rules": [rule.describe() for rule in rule_set.rules],
        }
        for name, rule_set in rule_sets.items()
    }


@router.post("/validate", response_model=ValidationReport)
async def validate(request: ValidateRequest):
    """Validate submitted sources and return the structured report."""
    for f in request.files:
        if len(f.content.encode("utf-8")) > settings.max_file_size_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"{f.path} exceeds maximum size of {settings.max_file_size_bytes} bytes",
            )

    engine = build_engine(request.rule_set)
    sources = {f.path: f.content for f in request.files}
    results = await engine.validate_contents(sources)

    stats = engine.get_stats()
    logger.info(
        f"Validated {len(results)} files with '{request.rule_set}': "
        f"{stats.total_violations} violations ({stats.execution_time:.1f}ms)"
    )
    return reporting.build_report(results, stats)
