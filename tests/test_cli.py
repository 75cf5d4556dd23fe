"""
Tests for the constraint-validate command line.
"""

import json

from click.testing import CliRunner

from constraint_engine.cli import main
from constraint_engine.core.reporting import ALL_CLEAR


CUSTOM_RULES = '''
from constraint_engine.core.helpers import create_violation
from constraint_engine.core.rule_builder import create_rule


def no_todo(context):
    return [
        create_violation("no-todo", "error", "Resolve TODO", context, line=m.line)
        for m in context.find_matches("TODO")
    ]


RULES = [
    create_rule()
    .id("no-todo")
    .name("No TODO")
    .description("TODO markers must be resolved")
    .severity("error")
    .validate(no_todo),
]
'''


def _invoke(*args):
    return CliRunner().invoke(main, list(args))


def test_plugins_reports_violations(plugin_project):
    result = _invoke("plugins", "--project", str(plugin_project))
    assert result.exit_code == 1
    assert "Constraint Validation Results" in result.output
    assert "ERRORS (" in result.output
    assert "Rule: must-extend-base-plugin" in result.output
    assert "Files processed: 2" in result.output


def test_plugins_clean_project(clean_plugin_project):
    result = _invoke("plugins", "-p", str(clean_plugin_project))
    assert result.exit_code == 0
    assert ALL_CLEAR in result.output


def test_plugins_json_output(plugin_project):
    result = _invoke("plugins", "--project", str(plugin_project), "--format", "json")
    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["summary"]["files"] == 2
    assert payload["summary"]["errors"] >= 1
    assert payload["stats"]["files_processed"] == 2


def test_plugins_text_flags(plugin_project):
    result = _invoke("plugins", "-p", str(plugin_project), "--by-file", "--no-stats", "--no-suggestions")
    assert result.exit_code == 1
    assert "broken.plugin.ts:" in result.output
    assert "Summary:" not in result.output
    assert "Fix:" not in result.output


def test_invalid_pattern_fails(plugin_project):
    result = _invoke("plugins", "-p", str(plugin_project), "--patterns", "src/{a,b")
    assert result.exit_code == 1
    assert "Validation failed" in result.output


def test_custom_rules_file(tmp_path):
    rules_file = tmp_path / "my_rules.py"
    rules_file.write_text(CUSTOM_RULES)
    (tmp_path / "a.ts").write_text("// TODO: finish\nexport const a = 1;\n")
    (tmp_path / "b.js").write_text("module.exports = {};\n")

    result = _invoke("custom", "--rules", str(rules_file), "--project", str(tmp_path))
    assert result.exit_code == 1
    assert "a.ts:1 - Resolve TODO" in result.output
    assert "Files processed: 2" in result.output


def test_custom_missing_rules_file(tmp_path):
    result = _invoke("custom", "-r", str(tmp_path / "nope.py"), "-p", str(tmp_path))
    assert result.exit_code == 1
    assert "Error: Rules file not found" in result.output


def test_custom_rules_file_without_rules(tmp_path):
    rules_file = tmp_path / "empty_rules.py"
    rules_file.write_text("VALUE = 1\n")
    result = _invoke("custom", "-r", str(rules_file), "-p", str(tmp_path))
    assert result.exit_code == 1
    assert "must define RULES" in result.output


def test_init_writes_template_once(tmp_path):
    first = _invoke("init", "--project", str(tmp_path))
    assert first.exit_code == 0
    target = tmp_path / "constraint_rules.py"
    assert target.exists()
    assert "Created" in first.output

    second = _invoke("init", "--project", str(tmp_path))
    assert second.exit_code == 1
    assert "already exists" in second.output


def test_init_template_runs(tmp_path):
    _invoke("init", "--project", str(tmp_path))
    (tmp_path / "a.ts").write_text("export const a = 1;\n")
    result = _invoke("custom", "-r", str(tmp_path / "constraint_rules.py"), "-p", str(tmp_path))
    assert result.exit_code == 0
    assert ALL_CLEAR in result.output


def test_rules_listing():
    result = _invoke("rules")
    assert result.exit_code == 0
    assert "plugin_rules v1.0.0" in result.output
    assert "no-hardcoded-secrets" in result.output


def test_version():
    result = _invoke("--version")
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_brace_patterns_are_not_split(tmp_path):
    (tmp_path / "a.ts").write_text("export const a = 1;\n")
    (tmp_path / "b.js").write_text("module.exports = {};\n")
    (tmp_path / "c.py").write_text("a = 1\n")

    result = _invoke("plugins", "-p", str(tmp_path), "--patterns", "**/*.{ts,js}")
    assert result.exit_code == 0
    assert ALL_CLEAR in result.output

    result = _invoke(
        "plugins", "-p", str(tmp_path), "--patterns", "**/*.{ts,js}, **/*.py", "--format", "json"
    )
    assert json.loads(result.stdout)["summary"]["files"] == 3
