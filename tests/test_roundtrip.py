"""
Same-dialect round trips.

Converting a file into its own dialect must keep every canonical section,
score 100 and not be flagged lossy (executable tool definitions aside).
"""

import json
import pytest
from pathlib import Path

from adapters import (
    ClaudeAdapter, CursorAdapter, GeminiAdapter, GenericAdapter, create_default_registry
)
from core.canonical_models import SectionType
from core.orchestrator import ConversionOrchestrator

FIXTURES = Path(__file__).parent / 'fixtures'


def read_fixture(name):
    return (FIXTURES / name).read_text(encoding='utf-8')


class TestSameDialectRoundTrip:

    def setup_method(self):
        self.orchestrator = ConversionOrchestrator(create_default_registry())

    def test_cursor_rule(self):
        raw = read_fixture('python-style.mdc')
        result = self.orchestrator.convert(raw, 'cursor', 'cursor')
        assert result.quality_score == 100
        assert result.lossy_conversion is False
        assert result.warnings == []

        adapter = CursorAdapter()
        original, _ = adapter.decode(raw)
        restored, warnings = adapter.decode(result.content)
        assert warnings == []
        assert restored.sections == original.sections
        assert restored.config_for(original.format) == original.config_for(original.format)

    def test_claude_agent(self):
        raw = read_fixture('reviewer.md')
        result = self.orchestrator.convert(raw, 'claude', 'claude')
        assert result.quality_score == 100
        assert result.lossy_conversion is False

        adapter = ClaudeAdapter()
        original, _ = adapter.decode(raw)
        restored, _ = adapter.decode(result.content)
        assert restored.sections == original.sections
        assert restored.name == 'code-reviewer'

    def test_kiro_agent_restores_extra_fields(self):
        raw = read_fixture('reviewer.json')
        result = self.orchestrator.convert(raw, 'kiro-agent', 'kiro-agent')
        document = json.loads(result.content)
        assert document['resources'] == ['file://README.md']
        assert document['tools'] == ['fs_read', 'execute_bash']
        assert document['model'] == 'sonnet'
        # Only the stripped executable definition costs points
        assert result.quality_score == 85

    def test_preserved_fragment_restored_in_own_dialect(self):
        raw = read_fixture('broken-frontmatter.mdc')
        result = self.orchestrator.convert(raw, 'cursor', 'cursor', options={'always_apply': True})
        assert 'description: [unclosed' in result.content
        assert result.quality_score == 100

    def test_gemini_command(self):
        raw = (
            'description = "Review the staged diff"\n'
            'prompt = """\n'
            'Review the staged changes.\n\n'
            '## Rules\n\n'
            '1. Flag missing tests\n'
            '2. Check error handling\n'
            '"""\n'
        )
        result = self.orchestrator.convert(raw, 'gemini', 'gemini')
        assert result.quality_score == 100
        assert result.warnings == []

        adapter = GeminiAdapter()
        original, _ = adapter.decode(raw)
        restored, _ = adapter.decode(result.content)
        assert restored.sections == original.sections


DOCS_BODY = """## Rules

1. Start every page with a one-line summary
   - *Rationale: readers skim*
   - Example: `Summary: one line`
2. Keep code samples runnable

## Examples

### ✅ Good: Fenced sample

````md
```py
x = 1
```
````

### ❌ Bad: Bare command

```
make docs
```
"""

DOCS_HEADERS = {
    'cursor': "---\ndescription: Docs conventions\nalwaysApply: true\n---\n",
    'claude': "---\nname: docs-style\ndescription: Docs conventions\n---\n",
    'claude-skill': "---\nname: docs-style\ndescription: Docs conventions\n---\n",
    'copilot': "---\napplyTo: docs/**/*.md\n---\n",
    'kiro': "---\ninclusion: always\n---\n",
    'agents.md': "",
    'generic': "",
    'windsurf': "",
    'aider': "",
    'trae': "",
    'ruler': "<!-- Package: docs-style -->\n\n",
    'continue': "---\nname: docs-style\ndescription: Docs conventions\n---\n",
    'droid': "---\nname: docs-style\ndescription: Docs conventions\n---\n",
    'zencoder': "---\ndescription: Docs conventions\n---\n",
}


@pytest.mark.parametrize('dialect', sorted(DOCS_HEADERS))
def test_markdown_dialect_round_trip(dialect):
    """Ordered rules with sub-items and nested fences survive every markdown dialect."""
    registry = create_default_registry()
    raw = DOCS_HEADERS[dialect] + DOCS_BODY
    result = ConversionOrchestrator(registry).convert(raw, dialect, dialect)
    assert result.quality_score == 100
    assert result.lossy_conversion is False
    assert result.warnings == []

    adapter = registry.get_adapter(dialect)
    original, _ = adapter.decode(raw)
    restored, warnings = adapter.decode(result.content)
    assert warnings == []

    rules = restored.sections_of(SectionType.RULES)
    assert rules == original.sections_of(SectionType.RULES)
    assert len(rules) == 1 and rules[0].ordered is True
    assert [rule.content for rule in rules[0].items] == [
        'Start every page with a one-line summary', 'Keep code samples runnable',
    ]
    assert rules[0].items[0].rationale == 'readers skim'
    assert rules[0].items[0].examples == ['Summary: one line']

    examples = restored.sections_of(SectionType.EXAMPLES)
    assert examples == original.sections_of(SectionType.EXAMPLES)
    assert [example.good for example in examples[0].examples] == [True, False]
    assert examples[0].examples[0].code == '```py\nx = 1\n```'
    assert examples[0].examples[1].code == 'make docs'


def test_nested_fence_round_trip():
    raw = "# Fences\n\n## Examples\n\n### Sample\n\n````md\n```py\nx = 1\n```\n````\n"
    result = ConversionOrchestrator(create_default_registry()).convert(raw, 'generic', 'generic')
    assert result.warnings == []
    assert '````md\n```py\nx = 1\n```\n````' in result.content

    restored, warnings = GenericAdapter().decode(result.content)
    assert warnings == []
    assert restored.sections_of(SectionType.EXAMPLES)[0].examples[0].code == '```py\nx = 1\n```'


def test_consecutive_rules_sections_kept_apart():
    raw = "## Rules\n\n- a\n\n## Rules\n\n- b\n"
    result = ConversionOrchestrator(create_default_registry()).convert(raw, 'generic', 'generic')
    assert result.content.count('## Rules') == 2

    restored, _ = GenericAdapter().decode(result.content)
    rules = restored.sections_of(SectionType.RULES)
    assert [[rule.content for rule in section.items] for section in rules] == [['a'], ['b']]
