"""
Unit tests for format registry.

Tests cover:
- Adapter registration and unregistration
- Adapter lookup by name, alias and Dialect
- Format detection from file paths and file content
- Subtype support queries
"""

import pytest
from pathlib import Path

from adapters import (
    ClaudeAdapter, CopilotAdapter, CursorAdapter, KiroAgentAdapter, create_default_registry
)
from core.canonical_models import Dialect, Subtype
from core.registry import FormatRegistry


class TestFormatRegistry:
    """Tests for FormatRegistry."""

    @pytest.fixture
    def registry(self):
        """Create FormatRegistry with every built-in adapter."""
        return create_default_registry()

    def test_register_adapter(self):
        """Test registering an adapter."""
        registry = FormatRegistry()
        registry.register(CursorAdapter())
        assert 'cursor' in registry.list_formats()
        assert registry.get_adapter('cursor') is not None

    def test_register_duplicate_raises_error(self, registry):
        """Test that registering duplicate format raises error."""
        with pytest.raises(ValueError, match="already registered"):
            registry.register(ClaudeAdapter())

    def test_unregister(self, registry):
        registry.unregister('copilot')
        assert registry.get_adapter('copilot') is None
        # Unknown names are ignored
        registry.unregister('nonexistent')

    def test_get_adapter(self, registry):
        """Test retrieving adapter by name, alias or Dialect."""
        assert registry.get_adapter('claude').format_name == 'claude'
        assert registry.get_adapter(Dialect.KIRO_AGENT).format_name == 'kiro-agent'
        assert registry.get_adapter('agents-md').format_name == 'agents.md'

    def test_get_nonexistent_adapter(self, registry):
        """Test retrieving non-existent adapter returns None."""
        assert registry.get_adapter('nonexistent') is None
        assert registry.get_adapter('unknown-format') is None

    def test_list_formats_in_registration_order(self, registry):
        assert registry.list_formats() == [
            'claude-skill', 'copilot', 'kiro', 'kiro-agent', 'agents.md',
            'aider', 'windsurf', 'continue', 'droid', 'ruler', 'trae', 'zencoder',
            'gemini', 'cursor', 'claude', 'generic',
        ]

    @pytest.mark.parametrize('path, expected', [
        ('.cursor/rules/style.mdc', 'cursor'),
        ('.cursorrules', 'cursor'),
        ('.claude/agents/planner.md', 'claude'),
        ('.claude/skills/pdf/SKILL.md', 'claude-skill'),
        ('.github/instructions/python.instructions.md', 'copilot'),
        ('.github/copilot-instructions.md', 'copilot'),
        ('.kiro/steering/tech.md', 'kiro'),
        ('.kiro/agents/reviewer.json', 'kiro-agent'),
        ('AGENTS.md', 'agents.md'),
        ('CONVENTIONS.md', 'aider'),
        ('.windsurfrules', 'windsurf'),
        ('.windsurf/rules/style.md', 'windsurf'),
        ('.continue/rules/api.md', 'continue'),
        ('.continue/prompts/review.md', 'continue'),
        ('.factory/droids/reviewer.md', 'droid'),
        ('.ruler/style.md', 'ruler'),
        ('.trae/rules/project_rules.md', 'trae'),
        ('.zencoder/rules/testing.md', 'zencoder'),
        ('.gemini/commands/review.toml', 'gemini'),
        ('docs/prompt.md', 'generic'),
    ])
    def test_detect_format(self, registry, path, expected):
        """Test auto-detecting format from file path."""
        adapter = registry.detect_format(Path(path))
        assert adapter is not None
        assert adapter.format_name == expected

    def test_detect_format_no_match(self, registry):
        """Test that detecting unknown format returns None."""
        assert registry.detect_format(Path('notes.txt')) is None

    @pytest.mark.parametrize('content, expected', [
        ('---\napplyTo: "**/*.py"\n---\n\nUse type hints.\n', 'copilot'),
        ('---\ninclusion: always\n---\n\n# Tech\n', 'kiro'),
        ('{"name": "reviewer", "prompt": "Review diffs."}', 'kiro-agent'),
        ('---\nproject: api\n---\n\n# API\n', 'agents.md'),
        ('---\nname: review\ninvokable: true\n---\n\nReview the diff.\n', 'continue'),
        ('<!-- Package: python-style -->\n\n# Python Style\n', 'ruler'),
        ('description = "Review"\nprompt = "Review the staged diff."\n', 'gemini'),
        ('---\ndescription: Style\nalwaysApply: false\n---\n\n# Style\n', 'cursor'),
        ('---\nname: planner\ntools: Read, Grep\n---\n\nYou plan.\n', 'claude'),
        ('# Notes\n\nPlain markdown.\n', 'generic'),
    ])
    def test_detect_content(self, registry, content, expected):
        adapter = registry.detect_content(content)
        assert adapter is not None
        assert adapter.format_name == expected

    def test_detect_content_no_match(self, registry):
        assert registry.detect_content('hello') is None
        assert registry.detect_content('[1, 2, 3]') is None

    def test_detect_format_respects_registration_order(self):
        """Without the specific adapters registered, the fallback claims nothing it can't."""
        registry = FormatRegistry()
        registry.register(CopilotAdapter())
        registry.register(KiroAgentAdapter())
        assert registry.detect_format(Path('AGENTS.md')) is None

    def test_supports_subtype(self, registry):
        assert registry.supports_subtype('kiro-agent', Subtype.AGENT)
        assert not registry.supports_subtype('kiro-agent', Subtype.RULE)
        assert registry.supports_subtype('cursor', Subtype.RULE)
        assert not registry.supports_subtype('nonexistent', Subtype.RULE)

    def test_get_formats_supporting(self, registry):
        formats = registry.get_formats_supporting(Subtype.AGENT)
        assert 'kiro-agent' in formats
        assert 'claude' in formats
