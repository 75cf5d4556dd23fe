"""Constraint engine CLI entry point."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from constraint_engine.config import VERSION, settings
from constraint_engine.core import reporting
from constraint_engine.core.discovery import split_patterns
from constraint_engine.core.engine import ValidationEngine
from constraint_engine.core.errors import ConstraintEngineError
from constraint_engine.models.result_models import EngineOptions
from constraint_engine.models.rule_models import RuleSet
from constraint_engine.rules.registry import RULE_SETS, load_rules_module

RULES_TEMPLATE = '''"""Custom constraint rules."""

from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule


def check(context):
    # Add your validation logic here
    return []


RULES = [
    create_rule()
    .id("example-rule")
    .name("Example Rule")
    .description("Example constraint rule")
    .severity("warning")
    .category("custom")
    .file_pattern(r"\\.ts$")
    .validate(check),
]
'''


def _validation_options(default_patterns: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Options shared by every command that runs a validation pass."""

    def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
        options = [
            click.option(
                "--project",
                "-p",
                type=click.Path(file_okay=False, path_type=Path),
                default=None,
                help="Project root (default: current directory).",
            ),
            click.option(
                "--patterns",
                default=default_patterns,
                show_default=True,
                help="Comma-separated file globs, relative to the project root.",
            ),
            click.option("--verbose", "-v", is_flag=True, help="Verbose output."),
            click.option(
                "--format",
                "fmt",
                type=click.Choice(["text", "json"]),
                default="text",
                show_default=True,
                help="Output format.",
            ),
            click.option("--no-suggestions", is_flag=True, help="Hide fix suggestions."),
            click.option("--by-file", is_flag=True, help="Group violations per file."),
            click.option("--no-stats", is_flag=True, help="Omit the summary block."),
        ]
        for option in reversed(options):
            fn = option(fn)
        return fn

    return decorator


@click.group()
@click.version_option(version=VERSION, prog_name="constraint-validate")
def main() -> None:
    """Validate code against architectural constraints."""


@main.command()
@_validation_options("src/plugins/**/*.plugin.ts")
def plugins(**options: Any) -> None:
    """Validate NestJS plugins with the built-in plugin rule set."""
    _run(RULE_SETS["plugin_rules"], **options)


@main.command()
@click.option(
    "--rules",
    "-r",
    "rules_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("constraint_rules.py"),
    show_default=True,
    help="Python file defining RULES or RULE_SET.",
)
@_validation_options("**/*.{ts,js}")
def custom(rules_path: Path, **options: Any) -> None:
    """Validate with rules loaded from a Python module."""
    try:
        rule_set = load_rules_module(rules_path)
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    _run(rule_set, **options)


@main.command()
@click.option(
    "--project",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: current directory).",
)
def init(project: Path | None) -> None:
    """Write an example constraint_rules.py into the project."""
    target = (project or Path.cwd()) / "constraint_rules.py"
    if target.exists():
        click.echo(f"Error: {target} already exists.", err=True)
        sys.exit(1)
    target.write_text(RULES_TEMPLATE, encoding="utf-8")
    click.echo(f"Created {target}")
    click.echo("Run validation with:")
    click.echo(f"  constraint-validate custom --rules {target}")


@main.command(name="rules")
def list_rules() -> None:
    """List the built-in rules."""
    for rule_set in RULE_SETS.values():
        click.echo(f"{rule_set.name} v{rule_set.version} - {rule_set.description}")
        for rule in rule_set.rules:
            click.echo(f"  {rule.id:34s}{rule.severity.value:9s}{rule.category:16s}{rule.name}")


def _run(
    rule_set: RuleSet,
    *,
    project: Path | None,
    patterns: str,
    verbose: bool,
    fmt: str,
    no_suggestions: bool,
    by_file: bool,
    no_stats: bool,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    project_root = (project or Path.cwd()).resolve()
    engine = ValidationEngine(
        EngineOptions.from_settings(project_root=str(project_root), verbose=verbose)
    )
    engine.add_rule_set(rule_set)

    pattern_list = split_patterns(patterns)

    try:
        results = asyncio.run(engine.validate_files(pattern_list))
    except Exception as exc:
        click.echo(f"Validation failed: {exc}", err=True)
        if verbose and not isinstance(exc, ConstraintEngineError):
            logging.getLogger("constraint_engine.cli").exception("Unhandled engine error")
        sys.exit(1)

    if fmt == "json":
        click.echo(reporting.format_json(results, engine.get_stats()))
    else:
        engine.print_results(
            results,
            show_stats=not no_stats,
            group_by_severity=not by_file,
            show_suggestions=not no_suggestions,
        )

    sys.exit(1 if reporting.has_errors(results) else 0)
