"""
API Request Models — payloads accepted by the HTTP surface.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SourceFile(BaseModel):
    """A single file submitted for validation."""

    path: str = Field(..., min_length=1, description="File path (absolute or relative)")
    content: str = Field(..., description="File source content")


class ValidateRequest(BaseModel):
    """Request body for POST /validate."""

    rule_set: str = Field(default="plugin_rules", description="Built-in rule set name")
    files: list[SourceFile] = Field(default_factory=list)
