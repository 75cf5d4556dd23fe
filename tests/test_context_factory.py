"""
Tests for context construction, language detection and derived queries.
"""

import re

import pytest

from constraint_engine.core.context_factory import create_context, detect_language


def test_detect_language_known_extensions():
    assert detect_language("a.ts") == "typescript"
    assert detect_language("a.TSX") == "typescript"
    assert detect_language("a.jsx") == "javascript"
    assert detect_language("pkg/mod.py") == "python"
    assert detect_language("main.go") == "go"


def test_detect_language_unknown_never_raises():
    assert detect_language("Makefile") == "unknown"
    assert detect_language("notes.weird") == "unknown"
    assert detect_language("") == "unknown"


def test_create_context_fields():
    context = create_context("/repo/src/a.plugin.ts", "class A {}", "/repo", {"k": 1})
    assert context.file == "a.plugin.ts"
    assert context.file_path == "/repo/src/a.plugin.ts"
    assert context.project_root == "/repo"
    assert context.language == "typescript"
    assert context.metadata == {"k": 1}


def test_context_structural_queries():
    content = (
        "import { Injectable } from '@nestjs/common';\n"
        "@Injectable()\n"
        "export class MailPlugin {\n"
        "  async execute(input: any): Promise<void> {\n"
        "  }\n"
        "}\n"
    )
    context = create_context("mail.plugin.ts", content)
    assert context.has_class(r"Plugin$")
    assert context.has_class(re.compile(r"^Mail"))
    assert not context.has_class(r"^Service")
    assert context.has_method("execute")
    assert context.has_import(r"^@nestjs/")
    assert context.has_decorator("Injectable")
    assert not context.has_interface("PluginMetadata")
    assert context.get_classes() == ["MailPlugin"]
    assert context.get_methods() == ["execute"]
    assert context.get_imports() == ["@nestjs/common"]
    assert context.contains("MailPlugin")
    assert [m.line for m in context.find_matches("async")] == [4]


def test_context_is_immutable():
    context = create_context("a.ts", "x")
    with pytest.raises(Exception):
        context.content = "y"


def test_syntax_tree_for_python():
    context = create_context("mod.py", "def add(a, b):\n    return a + b\n")
    tree = context.syntax_tree()
    assert tree is not None
    assert tree.root_node.type == "module"


def test_syntax_tree_unsupported_language():
    assert create_context("a.ts", "class A {}").syntax_tree() is None


def test_syntax_tree_rejects_broken_source():
    with pytest.raises(ValueError):
        create_context("mod.py", "def broken(:\n").syntax_tree()
