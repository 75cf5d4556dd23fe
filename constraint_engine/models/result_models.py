"""
Engine Result Models — options, per-file results, statistics and reports.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from constraint_engine.config import settings
from constraint_engine.models.rule_models import Severity, Violation


class EngineOptions(BaseModel):
    """Configuration for one ValidationEngine instance."""

    project_root: str = "."
    max_concurrency: int = Field(default=10, ge=1)
    enable_cache: bool = True
    verbose: bool = False
    exclude_patterns: list[str] = Field(
        default_factory=lambda: ["**/node_modules/**", "**/dist/**", "**/*.d.ts"]
    )

    @classmethod
    def from_settings(cls, **overrides: object) -> EngineOptions:
        """Options seeded from the environment-backed settings."""
        values: dict[str, object] = {
            "project_root": settings.project_root,
            "max_concurrency": settings.max_concurrency,
            "enable_cache": settings.enable_cache,
            "verbose": settings.verbose,
            "exclude_patterns": list(settings.exclude_patterns),
        }
        values.update(overrides)
        return cls.model_validate(values)


class ValidationResult(BaseModel):
    """Outcome of validating one file."""

    model_config = ConfigDict(frozen=True)

    file: str
    violations: tuple[Violation, ...] = ()
    is_valid: bool = True
    execution_time: float = Field(default=0.0, description="Wall-clock ms for this file")

    @classmethod
    def from_violations(
        cls, file: str, violations: Iterable[Violation], execution_time: float
    ) -> ValidationResult:
        found = tuple(violations)
        return cls(
            file=file,
            violations=found,
            is_valid=not any(v.severity == Severity.ERROR for v in found),
            execution_time=round(execution_time, 3),
        )


class EngineStats(BaseModel):
    """Counters for the current validation pass."""

    files_processed: int = 0
    rules_executed: int = 0
    total_violations: int = 0
    violations_by_severity: dict[Severity, int] = Field(default_factory=dict)
    cache_hits: int = 0
    execution_time: float = Field(default=0.0, description="Total wall-clock ms")
    average_file_time: float = 0.0

    def record_file(self, violations: Iterable[Violation]) -> None:
        self.files_processed += 1
        for v in violations:
            self.total_violations += 1
            self.violations_by_severity[v.severity] = (
                self.violations_by_severity.get(v.severity, 0) + 1
            )

    def finish(self, elapsed_ms: float, file_count: int) -> None:
        self.execution_time = round(elapsed_ms, 3)
        self.average_file_time = (
            round(elapsed_ms / file_count, 3) if file_count else 0.0
        )


class ReportSummary(BaseModel):
    """Headline counts across all results."""

    files: int = 0
    violations: int = 0
    errors: int = 0
    warnings: int = 0
    infos: int = 0


class ValidationReport(BaseModel):
    """Structured report, ready for JSON serialization."""

    summary: ReportSummary
    results: list[ValidationResult] = Field(default_factory=list)
    stats: EngineStats = Field(default_factory=EngineStats)
