"""
Validation Engine — discovers files, applies rules, aggregates violations.

Pipeline per pass:
1. Expand patterns into a de-duplicated file list (discovery collaborator)
2. Validate files in batches of `max_concurrency` (files in a batch overlap)
3. Per file: read → build context → filter rules → run each rule in its
   own error boundary → collect violations
4. Record statistics

Anything attributable to one file or one rule is contained and reported as
data. Discovery failures abort the whole pass.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

import click

from constraint_engine.cache.result_cache import ResultCache
from constraint_engine.config import settings
from constraint_engine.core import helpers, reporting
from constraint_engine.core.context_factory import create_context
from constraint_engine.core.discovery import discover_files, read_source
from constraint_engine.core.errors import FileAccessError, RuleExecutionError
from constraint_engine.models.context_models import ValidationContext
from constraint_engine.models.result_models import EngineOptions, EngineStats, ValidationResult
from constraint_engine.models.rule_models import Rule, RuleSet, Severity, Violation

logger = logging.getLogger("constraint_engine.engine")

# Reserved rule id for files that could not be read
FILE_READ_ERROR = "file-read-error"

DiscoverFn = Callable[[Sequence[str], str, Sequence[str]], list[str]]
ReadFileFn = Callable[[str], Awaitable[str]]

T = TypeVar("T")
R = TypeVar("R")


class ValidationEngine:
    """
    Applies an ordered rule set to source files.

    One engine per validation context: the rule list is instance state, and
    must not be mutated while a pass is in flight.
    """

    def __init__(
        self,
        options: EngineOptions | None = None,
        *,
        discover: DiscoverFn | None = None,
        read_file: ReadFileFn | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        self.options = options or EngineOptions.from_settings()
        self.cache = cache or ResultCache()
        self._discover = discover or discover_files
        self._read_file = read_file or read_source
        self._rules: list[Rule] = []
        # Bumped on every rule-set change so cached results go stale
        self._generation = 0
        self._stats = EngineStats()

    # ── Rule management ──

    def add_rule(self, rule: Rule) -> None:
        """Append a rule. Duplicate ids are allowed; both rules run."""
        self._rules.append(rule)
        self._rules_changed()

    def add_rules(self, rules: Iterable[Rule]) -> None:
        self._rules.extend(rules)
        self._rules_changed()

    def add_rule_set(self, rule_set: RuleSet) -> None:
        logger.debug(f"Adding rule set '{rule_set.name}' v{rule_set.version}")
        self.add_rules(rule_set.rules)

    def remove_rule(self, rule_id: str) -> None:
        """Remove every rule registered under this id."""
        self._rules = [r for r in self._rules if r.id != rule_id]
        self._rules_changed()

    def get_rules(self) -> list[Rule]:
        return list(self._rules)

    # ── Validation ──

    async def validate_file(self, file_path: str) -> ValidationResult:
        """
        Validate one file on disk.

        A read failure does not raise: it becomes a single error-severity
        violation with rule id ``file-read-error``.
        """
        start = time.monotonic()
        try:
            content = await self._read_file(file_path)
        except FileAccessError as e:
            logger.warning(f"Cannot read {file_path}: {e.cause}")
            violation = Violation(
                rule_id=FILE_READ_ERROR,
                severity=Severity.ERROR,
                message=str(e),
                file=str(file_path),
            )
            self._stats.record_file([violation])
            return ValidationResult.from_violations(
                str(file_path), [violation], _elapsed_ms(start)
            )

        return await self._validate(str(file_path), content, start)

    async def validate_content(self, file_path: str, content: str) -> ValidationResult:
        """Validate in-memory content as if it had been read from file_path."""
        return await self._validate(str(file_path), content, time.monotonic())

    async def validate_files(self, patterns: Sequence[str]) -> list[ValidationResult]:
        """
        Discover files matching the patterns and validate them all.

        Resets statistics. Result order follows discovery order within the
        limits of batching; callers should not rely on it.
        """
        start = time.monotonic()
        self.reset_stats()

        files = await asyncio.to_thread(
            self._discover,
            list(patterns),
            self.options.project_root,
            list(self.options.exclude_patterns),
        )
        files = list(dict.fromkeys(files))

        if self.options.verbose:
            logger.info(f"Found {len(files)} files to validate")

        results = await self._run_batches(files, self.validate_file)

        self._stats.finish(_elapsed_ms(start), len(files))
        logger.debug(
            f"Validated {len(files)} files in {self._stats.execution_time:.1f}ms "
            f"({self._stats.total_violations} violations)"
        )
        if self.options.enable_cache:
            cache_stats = self.cache.stats()
            logger.debug(
                f"Cache: {self._stats.cache_hits} hits, "
                f"{cache_stats['active_entries']}/{cache_stats['total_entries']} entries active"
            )
        return results

    async def validate_contents(self, sources: Mapping[str, str]) -> list[ValidationResult]:
        """Batch counterpart of validate_content: a full pass without disk I/O."""
        start = time.monotonic()
        self.reset_stats()

        async def _one(item: tuple[str, str]) -> ValidationResult:
            return await self.validate_content(*item)

        results = await self._run_batches(list(sources.items()), _one)
        self._stats.finish(_elapsed_ms(start), len(sources))
        return results

    async def validate_project(
        self, patterns: Sequence[str] | None = None
    ) -> list[ValidationResult]:
        """Validate with the configured default source patterns."""
        return await self.validate_files(patterns or list(settings.default_patterns))

    # ── Stats & output ──

    def get_stats(self) -> EngineStats:
        """Snapshot copy of the current counters."""
        return self._stats.model_copy(deep=True)

    def reset_stats(self) -> None:
        self._stats = EngineStats()

    def print_results(
        self,
        results: Sequence[ValidationResult],
        *,
        show_stats: bool = True,
        group_by_severity: bool = True,
        show_suggestions: bool = True,
    ) -> str:
        """Echo the text report to stdout and return it."""
        text = reporting.format_text(
            results,
            self.get_stats(),
            group_by_severity=group_by_severity,
            show_suggestions=show_suggestions,
            show_stats=show_stats,
        )
        click.echo(text)
        return text

    # ── Internals ──

    def should_apply_rule(self, rule: Rule, file_path: str) -> bool:
        """Exclude patterns win; an empty include list means every file."""
        if rule.exclude_patterns and helpers.matches_any_pattern(file_path, rule.exclude_patterns):
            return False
        if rule.file_patterns:
            return helpers.matches_any_pattern(file_path, rule.file_patterns)
        return True

    async def _validate(self, file_path: str, content: str, start: float) -> ValidationResult:
        use_cache = self.options.enable_cache
        generation = self._generation

        if use_cache:
            cached = self.cache.get(file_path, content, generation)
            if cached is not None:
                self._stats.cache_hits += 1
                self._stats.record_file(cached.violations)
                return ValidationResult.from_violations(
                    file_path, cached.violations, _elapsed_ms(start)
                )

        context = create_context(file_path, content, self.options.project_root)
        violations: list[Violation] = []

        for rule in list(self._rules):
            if not self.should_apply_rule(rule, file_path):
                continue
            found = await self._run_rule(rule, context)
            if found is not None:
                violations.extend(found)

        if use_cache:
            self.cache.put(file_path, content, generation, tuple(violations))

        self._stats.record_file(violations)
        return ValidationResult.from_violations(file_path, violations, _elapsed_ms(start))

    async def _run_rule(self, rule: Rule, context: ValidationContext) -> list[Violation] | None:
        """Run one rule; on failure log (when verbose) and return None."""
        try:
            outcome: Any = rule.validate(context)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            violations = _check_violations(rule, outcome)
        except Exception as e:
            error = RuleExecutionError(rule.id, context.file_path, e)
            if self.options.verbose:
                logger.warning(str(error), exc_info=e)
            return None

        self._stats.rules_executed += 1
        return violations

    async def _run_batches(
        self, items: Sequence[T], worker: Callable[[T], Awaitable[R]]
    ) -> list[R]:
        # A batch must fully settle before the next one starts
        batch_size = self.options.max_concurrency
        results: list[R] = []
        for i in range(0, len(items), batch_size):
            batch = items[i : i + batch_size]
            results.extend(await asyncio.gather(*(worker(item) for item in batch)))
        return results

    def _rules_changed(self) -> None:
        self._generation += 1
        self.cache.clear()


def _check_violations(rule: Rule, outcome: Any) -> list[Violation]:
    if not isinstance(outcome, (list, tuple)):
        raise TypeError(
            f"rule '{rule.id}' returned {type(outcome).__name__}, expected a list of Violation"
        )
    for item in outcome:
        if not isinstance(item, Violation):
            raise TypeError(
                f"rule '{rule.id}' returned {type(item).__name__} instead of Violation"
            )
    return list(outcome)


def _elapsed_ms(start: float) -> float:
    return (time.monotonic() - start) * 1000
