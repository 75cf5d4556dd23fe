"""
Test fixtures shared across all constraint engine tests.
"""

import pytest

from constraint_engine.core.engine import ValidationEngine
from constraint_engine.core.rule_builder import create_rule
from constraint_engine.models.result_models import EngineOptions


GOOD_PLUGIN = """import { Injectable, Logger } from '@nestjs/common';
import { BaseActionPlugin } from '../core/base-plugin.abstract';
import { PluginMetadata } from '../core/plugin.interface';

@Injectable()
export class GreetingPlugin extends BaseActionPlugin {
  private readonly logger = new Logger(GreetingPlugin.name);

  readonly metadata: PluginMetadata = {
    name: 'greeting',
    version: '1.0.0',
    description: 'Says hello',
    author: 'Platform Team',
    category: 'utility',
  };

  async execute(input: { name: string }): Promise<string> {
    this.logger.log(`greeting ${input.name}`);
    return `Hello, ${input.name}`;
  }

  async healthCheck(): Promise<boolean> {
    return true;
  }
}
"""

BAD_PLUGIN = """export class BrokenPlugin {
  readonly metadata = {
    name: 'broken',
    category: 'misc',
  };

  run() {
    console.log('running');
    const apiKey = 'sk-live-1234567890';
  }
}
"""


@pytest.fixture
def good_plugin_source():
    """A plugin that satisfies every built-in plugin rule."""
    return GOOD_PLUGIN


@pytest.fixture
def bad_plugin_source():
    """A plugin that breaks most built-in plugin rules."""
    return BAD_PLUGIN


@pytest.fixture
def make_rule():
    """Factory for small rules built through the fluent builder."""

    def _make(rule_id, validator, *, severity="warning", patterns=(), excludes=()):
        builder = (
            create_rule()
            .id(rule_id)
            .name(rule_id.replace("-", " ").title())
            .description(f"Test rule {rule_id}")
            .severity(severity)
        )
        for pattern in patterns:
            builder.file_pattern(pattern)
        for pattern in excludes:
            builder.exclude_pattern(pattern)
        return builder.validate(validator)

    return _make


@pytest.fixture
def engine(tmp_path):
    """Engine rooted at an empty temporary project, cache disabled."""
    return ValidationEngine(EngineOptions(project_root=str(tmp_path), enable_cache=False))


@pytest.fixture
def plugin_project(tmp_path):
    """Project with one good plugin (plus its spec) and one bad plugin."""
    plugins = tmp_path / "src" / "plugins"
    plugins.mkdir(parents=True)
    (plugins / "greeting.plugin.ts").write_text(GOOD_PLUGIN)
    (plugins / "greeting.plugin.spec.ts").write_text("describe('GreetingPlugin', () => {});\n")
    (plugins / "broken.plugin.ts").write_text(BAD_PLUGIN)
    return tmp_path


@pytest.fixture
def clean_plugin_project(tmp_path):
    """Project whose only plugin passes every rule."""
    plugins = tmp_path / "src" / "plugins"
    plugins.mkdir(parents=True)
    (plugins / "greeting.plugin.ts").write_text(GOOD_PLUGIN)
    (plugins / "greeting.plugin.spec.ts").write_text("describe('GreetingPlugin', () => {});\n")
    return tmp_path
