"""
Tests for text-matching helpers.
"""

import re

from constraint_engine.core import helpers
from constraint_engine.core.context_factory import create_context
from constraint_engine.models.rule_models import Severity


TS_SOURCE = """import { Injectable } from '@nestjs/common';
import * as fs from 'fs';
import './polyfills';
const path = require('path');

@Injectable()
export class GoodPlugin extends BaseActionPlugin {
  constructor(private readonly logger: Logger) {
    super();
  }

  async execute(input: any): Promise<any> {
    if (input) {
      return input;
    }
  }

  async healthCheck(): Promise<boolean> {
    return true;
  }
}

export interface PluginMetadata {
  name: string;
}

type Handler = () => void;
"""

PY_SOURCE = """import os
import os.path as osp
from typing import Any
from .models import Thing


class Service:
    def run(self):
        pass

    async def stop(self) -> None:
        pass
"""


def test_contains_string_is_literal():
    assert helpers.contains("a.b", "a.b")
    assert not helpers.contains("axb", "a.b")


def test_contains_regex():
    assert helpers.contains("axb", re.compile(r"a.b"))
    assert not helpers.contains("ab", re.compile(r"a.b"))


def test_find_matches_reports_one_based_positions():
    content = "foo\n  console.log(1); console.log(2)\n"
    matches = helpers.find_matches(content, re.compile(r"console\.log"))
    assert [(m.line, m.column) for m in matches] == [(2, 3), (2, 19)]
    assert all(m.match == "console.log" for m in matches)


def test_find_matches_does_not_span_lines():
    assert helpers.find_matches("abc\ndef", re.compile(r"c\nd")) == []


def test_find_matches_string_is_literal():
    assert helpers.find_matches("axb", "a.b") == []
    assert [m.column for m in helpers.find_matches("x a.b", "a.b")] == [3]


def test_matches_any_pattern():
    patterns = [re.compile(r"src/plugins/.*\.plugin\.ts$")]
    assert helpers.matches_any_pattern("/repo/src/plugins/a.plugin.ts", patterns)
    assert helpers.matches_any_pattern("src\\plugins\\a.plugin.ts", patterns)
    assert not helpers.matches_any_pattern("/repo/src/services/a.ts", patterns)
    assert not helpers.matches_any_pattern("anything", [])


def test_extract_classes():
    assert helpers.extract_classes(TS_SOURCE) == ["GoodPlugin"]
    assert helpers.extract_classes(PY_SOURCE) == ["Service"]


def test_extract_methods_typescript():
    assert helpers.extract_methods(TS_SOURCE) == ["constructor", "execute", "healthCheck"]


def test_extract_methods_python():
    assert helpers.extract_methods(PY_SOURCE) == ["run", "stop"]


def test_extract_imports_typescript():
    assert helpers.extract_imports(TS_SOURCE) == ["@nestjs/common", "fs", "./polyfills", "path"]


def test_extract_imports_python():
    assert helpers.extract_imports(PY_SOURCE) == ["os", "os.path", "typing", ".models"]


def test_has_decorator_by_exact_name():
    assert helpers.has_decorator(TS_SOURCE, "Injectable")
    assert not helpers.has_decorator(TS_SOURCE, "Inject")
    assert helpers.has_decorator("@dataclass\nclass A:\n    pass\n", "dataclass")


def test_has_interface_or_type():
    assert helpers.has_interface(TS_SOURCE, "PluginMetadata")
    assert helpers.has_interface(TS_SOURCE, "Handler")
    assert not helpers.has_interface(TS_SOURCE, "Plugin")


def test_compiled_name_patterns_keep_flags():
    assert helpers.has_decorator(TS_SOURCE, re.compile("injectable", re.IGNORECASE))
    assert not helpers.has_decorator(TS_SOURCE, re.compile("injectable"))
    assert helpers.has_interface(TS_SOURCE, re.compile("pluginmetadata", re.IGNORECASE))
    assert not helpers.has_interface(TS_SOURCE, re.compile("pluginmetadata"))


def test_create_violation_uses_display_name():
    context = create_context("/repo/src/plugins/a.plugin.ts", "", "/repo")
    v = helpers.create_violation(
        "r1", "warning", "message", context, suggestion="fix it", line=3, column=7
    )
    assert v.file == "a.plugin.ts"
    assert v.severity == Severity.WARNING
    assert (v.line, v.column, v.suggestion) == (3, 7, "fix it")
