"""
Health Check Route — GET /health
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from constraint_engine.api.dependencies import get_rule_sets
from constraint_engine.config import VERSION
from constraint_engine.models.rule_models import RuleSet

router = APIRouter()


@router.get("/health")
async def health(rule_sets: dict[str, RuleSet] = Depends(get_rule_sets)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": VERSION,
        "rule_sets": sorted(rule_sets),
    }
