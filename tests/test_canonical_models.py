"""
Unit tests for canonical data models.

Tests cover:
- Dialect name resolution and aliases
- Section type tags
- CanonicalPackage helpers (metadata, sections_of, body_sections, config_for)
- Value semantics of with_sections
- ConversionResult serialization
"""

import pytest

from core.canonical_models import (
    SECTION_CLASSES, CanonicalPackage, ConversionResult, CursorConfig, CustomSection,
    Dialect, InstructionsSection, MetadataSection, Priority, Rule, RulesSection,
    SectionType, ToolsSection
)


class TestDialect:
    """Tests for Dialect enum."""

    def test_parse_names(self):
        """Test that every dialect parses from its own name."""
        for dialect in Dialect:
            assert Dialect.parse(dialect.value) is dialect

    def test_parse_is_case_insensitive(self):
        assert Dialect.parse('CURSOR') is Dialect.CURSOR
        assert Dialect.parse(' Kiro ') is Dialect.KIRO

    def test_parse_aliases(self):
        """Test common spellings of agents.md and claude-skill."""
        assert Dialect.parse('agents-md') is Dialect.AGENTS_MD
        assert Dialect.parse('agents_md') is Dialect.AGENTS_MD
        assert Dialect.parse('skill') is Dialect.CLAUDE_SKILL
        assert Dialect.parse('kiro_agent') is Dialect.KIRO_AGENT

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown format"):
            Dialect.parse('vscode')

    def test_names(self):
        names = Dialect.names()
        assert 'agents.md' in names
        assert len(names) == 16
        assert names[-1] == 'generic'


class TestSections:
    """Tests for the section variants."""

    def test_every_type_has_a_class(self):
        assert set(SECTION_CLASSES) == set(SectionType)
        for section_type, cls in SECTION_CLASSES.items():
            assert cls.type == section_type

    def test_defaults(self):
        instructions = InstructionsSection(content='Be brief.')
        assert instructions.priority == Priority.MEDIUM
        assert instructions.title == ''

        rules = RulesSection(items=[Rule('One')])
        assert rules.title == 'Rules'
        assert rules.ordered is False

        custom = CustomSection(content='raw')
        assert custom.executable is False
        assert custom.metadata == {}


class TestCanonicalPackage:
    """Tests for CanonicalPackage."""

    @pytest.fixture
    def package(self):
        return CanonicalPackage(
            id='style',
            name='Style',
            sections=[
                MetadataSection(title='Style'),
                InstructionsSection(content='Write clearly.'),
                ToolsSection(tools=['Read']),
            ],
            dialect_configs={Dialect.CURSOR: CursorConfig(always_apply=True)},
        )

    def test_create_minimal_package(self):
        pkg = CanonicalPackage(id='p', name='P')
        assert pkg.version == '1.0.0'
        assert pkg.format == Dialect.GENERIC
        assert pkg.sections == []
        assert pkg.metadata_section() is None

    def test_metadata_section(self, package):
        assert package.metadata_section().title == 'Style'

    def test_sections_of(self, package):
        tools = package.sections_of(SectionType.TOOLS)
        assert len(tools) == 1
        assert tools[0].tools == ['Read']

    def test_body_sections_exclude_metadata(self, package):
        assert [s.type for s in package.body_sections()] == [
            SectionType.INSTRUCTIONS, SectionType.TOOLS
        ]

    def test_config_for(self, package):
        assert package.config_for(Dialect.CURSOR).always_apply is True
        assert package.config_for(Dialect.KIRO) is None

    def test_with_sections_returns_copy(self, package):
        """Test that with_sections leaves the original package untouched."""
        trimmed = package.with_sections(package.sections[:1])
        assert len(trimmed.sections) == 1
        assert len(package.sections) == 3
        assert trimmed.id == package.id


class TestConversionResult:
    """Tests for ConversionResult."""

    def test_defaults(self):
        result = ConversionResult(content='x', format=Dialect.CLAUDE)
        assert result.quality_score == 100
        assert result.lossy_conversion is False
        assert result.warnings == []

    def test_to_dict(self):
        result = ConversionResult(content='x', format=Dialect.AGENTS_MD, warnings=['w'],
                                  lossy_conversion=True, quality_score=75, filename='AGENTS.md')
        data = result.to_dict()
        assert data['format'] == 'agents.md'
        assert data['lossyConversion'] is True
        assert data['qualityScore'] == 75
        assert data['warnings'] == ['w']
