"""
Reporting — turns ValidationResults into text or a JSON-ready report.

Pure transformations: nothing here re-runs rules or mutates its inputs.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import PurePath

from constraint_engine.models.result_models import (
    EngineStats,
    ReportSummary,
    ValidationReport,
    ValidationResult,
)
from constraint_engine.models.rule_models import Severity, Violation

ALL_CLEAR = "No violations found. All files pass architectural constraints."

_GROUP_TITLES = {
    Severity.ERROR: "ERRORS",
    Severity.WARNING: "WARNINGS",
    Severity.INFO: "INFO",
}


def summarize(results: Sequence[ValidationResult]) -> ReportSummary:
    """Count files and violations per severity."""
    violations = [v for r in results for v in r.violations]
    return ReportSummary(
        files=len(results),
        violations=len(violations),
        errors=sum(1 for v in violations if v.severity == Severity.ERROR),
        warnings=sum(1 for v in violations if v.severity == Severity.WARNING),
        infos=sum(1 for v in violations if v.severity == Severity.INFO),
    )


def has_errors(results: Sequence[ValidationResult]) -> bool:
    return any(not r.is_valid for r in results)


def format_text(
    results: Sequence[ValidationResult],
    stats: EngineStats | None = None,
    *,
    group_by_severity: bool = True,
    show_suggestions: bool = True,
    show_stats: bool = True,
) -> str:
    """
    Human-readable report.

    Violations are grouped by severity across all files, or listed per file
    in result order when ``group_by_severity`` is false.
    """
    summary = summarize(results)
    if summary.violations == 0:
        return ALL_CLEAR

    lines: list[str] = ["Constraint Validation Results", "=============================="]

    if group_by_severity:
        violations = [v for r in results for v in r.violations]
        for severity in Severity:
            group = [v for v in violations if v.severity == severity]
            if group:
                lines.append("")
                lines.append(f"{_GROUP_TITLES[severity]} ({len(group)}):")
                lines.extend(_format_violations(group, show_suggestions))
    else:
        for result in results:
            if result.violations:
                lines.append("")
                lines.append(f"{result.file}:")
                lines.extend(_format_violations(result.violations, show_suggestions))

    if show_stats:
        files_processed = stats.files_processed if stats else summary.files
        lines.append("")
        lines.append("Summary:")
        lines.append(f"  Files processed: {files_processed}")
        lines.append(f"  Total violations: {summary.violations}")
        lines.append(
            f"  Errors: {summary.errors}, Warnings: {summary.warnings}, Info: {summary.infos}"
        )
        if stats is not None:
            lines.append(f"  Execution time: {stats.execution_time:.0f}ms")

    return "\n".join(lines)


def build_report(
    results: Sequence[ValidationResult], stats: EngineStats | None = None
) -> ValidationReport:
    """Structured report: summary counts, per-file results, stats snapshot."""
    return ValidationReport(
        summary=summarize(results),
        results=list(results),
        stats=stats.model_copy(deep=True) if stats else EngineStats(),
    )


def format_json(
    results: Sequence[ValidationResult], stats: EngineStats | None = None
) -> str:
    return build_report(results, stats).model_dump_json(indent=2)


def _format_violations(violations: Sequence[Violation], show_suggestions: bool) -> list[str]:
    lines: list[str] = []
    for v in violations:
        location = f":{v.line}" if v.line is not None else ""
        lines.append(f"  {PurePath(v.file).name or v.file}{location} - {v.message}")
        lines.append(f"    Rule: {v.rule_id}")
        if show_suggestions and v.suggestion:
            lines.append(f"    Fix: {v.suggestion}")
    return lines
