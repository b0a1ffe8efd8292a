"""
Unit tests for the shared markdown parser and renderer.

Tests cover:
- Document splitting (title, lead, blocks, headings inside code)
- Heading classification and the ambiguous-heading policy
- Rules, examples and persona parsing
- Parse gaps for unterminated code fences
- Renderer output read back by the parser
"""

import pytest

from adapters.shared.builder import PackageBuilder
from adapters.shared.markdown_parser import (
    classify_heading, parse_body, parse_example_label, parse_examples, parse_persona,
    parse_rules, split_document, split_icon
)
from adapters.shared.markdown_renderer import (
    render_example, render_persona, render_rules, render_rules_as_prose
)
from core.canonical_models import (
    ContextSection, CustomSection, Dialect, Example, ExamplesSection, InstructionsSection,
    PersonaSection, Priority, Rule, RulesSection, SectionType
)


def parse(body, **kwargs):
    builder = PackageBuilder(Dialect.GENERIC)
    parse_body(body, builder, **kwargs)
    return builder


class TestSplitDocument:
    """Tests for split_document."""

    def test_title_lead_and_blocks(self):
        doc = split_document("# Title\n\nLead text.\n\n## One\n\nA\n\n## Two\n\nB")
        assert doc.title == 'Title'
        assert doc.lead.text.strip() == 'Lead text.'
        assert [block.title for block in doc.blocks] == ['One', 'Two']

    def test_headings_inside_fences_are_ignored(self):
        doc = split_document("## Examples\n\n```markdown\n## Not a heading\n```\n")
        assert [block.title for block in doc.blocks] == ['Examples']
        assert '## Not a heading' in doc.blocks[0].text

    def test_level_three_headings_stay_in_block(self):
        doc = split_document("## Examples\n\n### First\n\ntext")
        assert len(doc.blocks) == 1

    def test_split_icon(self):
        assert split_icon('🔧 Tools') == ('🔧', 'Tools')
        assert split_icon('Python Style') == (None, 'Python Style')


class TestClassifyHeading:
    """Tests for classify_heading."""

    @pytest.mark.parametrize('title, expected', [
        ('Examples', SectionType.EXAMPLES),
        ('Code Example', SectionType.EXAMPLES),
        ('Rules', SectionType.RULES),
        ('Coding Guidelines', SectionType.RULES),
        ('Best Practices', SectionType.RULES),
        ('Naming Conventions', SectionType.RULES),
        ('Persona', SectionType.PERSONA),
        ('Your Role', SectionType.PERSONA),
        ('Background', SectionType.CONTEXT),
        ('Project Context', SectionType.CONTEXT),
        ('Deployment Notes', None),
        (None, None),
    ])
    def test_classify(self, title, expected):
        assert classify_heading(title) == expected


class TestParseRules:
    """Tests for parse_rules."""

    def test_bulleted_rules_with_sub_items(self):
        lines = [
            '- Use type hints',
            '  - *Rationale: signatures document themselves*',
            '  - Example: `def f(x: int) -> str`',
            '- Keep functions short',
            '  - or split them',
        ]
        intro, rules, trailing, ordered = parse_rules(lines)
        assert intro == ''
        assert trailing == ''
        assert ordered is False
        assert rules[0] == Rule(
            content='Use type hints',
            rationale='signatures document themselves',
            examples=['def f(x: int) -> str'],
        )
        assert rules[1].content == 'Keep functions short\n- or split them'

    def test_ordered_rules_and_surrounding_prose(self):
        lines = ['Follow these:', '', '1. First', '2) Second', '   continued', '', 'Thanks.']
        intro, rules, trailing, ordered = parse_rules(lines)
        assert intro == 'Follow these:'
        assert ordered is True
        assert [rule.content for rule in rules] == ['First', 'Second\ncontinued']
        assert trailing == 'Thanks.'


class TestParseExamples:
    """Tests for parse_examples and example labels."""

    @pytest.mark.parametrize('label, expected', [
        ('✅ Good: Use const', ('Use const', True)),
        ('❌ Bad: var everywhere', ('var everywhere', False)),
        ('Good example: pure function', ('pure function', True)),
        ('Incorrect: mutable default', ('mutable default', False)),
        ('Avoid globals', ('Avoid globals', False)),
        ('Reading a file', ('Reading a file', None)),
    ])
    def test_parse_example_label(self, label, expected):
        assert parse_example_label(label) == expected

    def test_heading_and_prose_describe_fence(self):
        lines = [
            '### ✅ Good: context manager',
            'Closes the file for you.',
            '```python',
            'with open(p) as f:',
            '    data = f.read()',
            '```',
        ]
        examples, leftover, gap = parse_examples(lines)
        assert leftover == ''
        assert gap == ''
        assert examples == [Example(
            code='with open(p) as f:\n    data = f.read()',
            description='context manager\n\nCloses the file for you.',
            language='python',
            good=True,
        )]

    def test_unterminated_fence_is_a_gap(self):
        examples, leftover, gap = parse_examples(['Intro', '```js', 'let x = 1;'])
        assert examples == []
        assert leftover == 'Intro'
        assert gap == '```js\nlet x = 1;'


class TestParsePersona:
    """Tests for parse_persona."""

    def test_named_persona_with_traits(self):
        persona, rest = parse_persona(
            "You are Ada, a senior Python reviewer.\n\nStyle: concise, direct\nExpertise: typing"
        )
        assert persona == PersonaSection(
            role='a senior Python reviewer', name='Ada',
            style=['concise', 'direct'], expertise=['typing'],
        )
        assert rest == ''

    def test_unnamed_persona_keeps_remaining_text(self):
        persona, rest = parse_persona("You are a helpful assistant.\n\nAnswer briefly.")
        assert persona.name is None
        assert persona.role == 'a helpful assistant'
        assert rest == 'Answer briefly.'

    def test_not_a_persona(self):
        persona, rest = parse_persona("Always answer briefly.")
        assert persona is None
        assert rest == "Always answer briefly."


class TestParseBody:
    """Tests for parse_body classification of whole documents."""

    def test_ambiguous_heading_becomes_instructions(self):
        builder = parse("## Deployment Notes\n\nShip on Tuesdays.")
        assert builder.sections == [
            InstructionsSection(content='Ship on Tuesdays.', title='Deployment Notes')
        ]

    def test_rules_heading_with_prose(self):
        builder = parse("## Coding Standards\n\nFollow these:\n\n- A\n- B\n\nThanks.")
        kinds = [section.type for section in builder.sections]
        assert kinds == [SectionType.INSTRUCTIONS, SectionType.RULES, SectionType.INSTRUCTIONS]
        assert builder.sections[0].title == 'Coding Standards'
        assert [rule.content for rule in builder.sections[1].items] == ['A', 'B']

    def test_rules_heading_without_list_is_instructions(self):
        builder = parse("## Rules\n\nUse common sense.")
        assert builder.sections[0].type == SectionType.INSTRUCTIONS

    def test_lists_not_promoted_when_rule_detection_is_off(self):
        builder = parse("## Rules\n\n- A\n- B", detect_rules=False)
        assert builder.sections == [InstructionsSection(content='- A\n- B', title='Rules')]

    def test_fenced_code_under_any_heading_is_examples(self):
        builder = parse("## Usage\n\n```bash\nmake test\n```")
        section = builder.sections[0]
        assert isinstance(section, ExamplesSection)
        assert section.title == 'Usage'
        assert section.examples[0].language == 'bash'

    def test_context_section(self):
        builder = parse("## Background\n\nThe service runs on Kubernetes.")
        assert builder.sections == [
            ContextSection(content='The service runs on Kubernetes.', title='Background')
        ]

    def test_important_sets_high_priority(self):
        builder = parse("## Security\n\n**Important:** Never log secrets.")
        section = builder.sections[0]
        assert section.priority == Priority.HIGH
        assert section.content == 'Never log secrets.'

    def test_lead_description_and_title(self):
        builder = parse("# 🐍 Python Helper\n\nHelps with Python.\n\nMore detail here.",
                        lead_description=True)
        assert builder.metadata.title == 'Python Helper'
        assert builder.metadata.icon == '🐍'
        assert builder.metadata.description == 'Helps with Python.'
        assert builder.sections == [InstructionsSection(content='More detail here.')]

    def test_persona_lead(self):
        builder = parse("You are a release manager.\n\n## Steps\n\nTag the release.")
        assert isinstance(builder.sections[0], PersonaSection)
        assert builder.sections[1].title == 'Steps'

    def test_unterminated_fence_preserved_with_warning(self):
        builder = parse("## Examples\n\n```python\nprint(1)\n")
        assert len(builder.sections) == 1
        custom = builder.sections[0]
        assert isinstance(custom, CustomSection)
        assert custom.dialect == 'generic'
        assert custom.content.startswith('```python\nprint(1)')
        assert len(builder.warnings) == 1
        assert 'preserved verbatim' in builder.warnings[0]


class TestRenderer:
    """Tests for renderer helpers read back by the parser."""

    def test_render_rules(self):
        section = RulesSection(items=[
            Rule('Use type hints', rationale='clarity', examples=['x: int = 1']),
            Rule('Keep it short'),
        ])
        assert render_rules(section) == (
            "- Use type hints\n"
            "  - *Rationale: clarity*\n"
            "  - Example: `x: int = 1`\n"
            "- Keep it short"
        )

    def test_render_ordered_rules_parse_back(self):
        section = RulesSection(items=[Rule('First', rationale='why not'), Rule('Second')],
                               ordered=True)
        _, rules, _, ordered = parse_rules(render_rules(section).split('\n'))
        assert ordered is True
        assert rules == section.items

    def test_render_rules_as_prose(self):
        section = RulesSection(items=[Rule('Use tabs', rationale='house style.'), Rule('Test it!')])
        assert render_rules_as_prose(section) == 'Use tabs (house style). Test it!'

    def test_render_example(self):
        example = Example(code='x = 1', description='Assignment', language='python', good=False)
        assert render_example(example) == "### ❌ Bad: Assignment\n\n```python\nx = 1\n```"

    def test_render_persona(self):
        persona = PersonaSection(role='a reviewer', name='Rex', style=['terse'])
        assert render_persona(persona) == "You are Rex, a reviewer.\n\nStyle: terse"
