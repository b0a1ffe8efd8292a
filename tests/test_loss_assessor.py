"""
Unit tests for the loss assessor.

Tests cover:
- Individual penalties (tools, custom, collapsed rules, metadata)
- Score clamping and the content floor
- Purity: repeated calls agree and inputs are left untouched
"""

import copy
import pytest

from adapters.cursor.encoder import CAPABILITIES as CURSOR
from adapters.claude.encoder import CAPABILITIES as CLAUDE
from adapters.kiro_agent.encoder import CAPABILITIES as KIRO_AGENT
from core.canonical_models import (
    CanonicalPackage, ClaudeConfig, ConversionResult, CustomSection, Dialect,
    InstructionsSection, MetadataSection, Rule, RulesSection, ToolsSection
)
from core.loss_assessor import assess_conversion


def make_package(*sections, metadata=None):
    return CanonicalPackage(id='p', name='P',
                            sections=[metadata or MetadataSection(title='P')] + list(sections))


def result_for(dialect):
    return ConversionResult(content='', format=dialect)


def assess(pkg, target, capabilities, source=Dialect.CLAUDE):
    return assess_conversion(pkg, result_for(target), source, target, capabilities)


class TestPenalties:
    """Each kind of loss costs a fixed number of points."""

    def test_lossless(self):
        pkg = make_package(InstructionsSection(content='Do it.'))
        assessment = assess(pkg, Dialect.CLAUDE, CLAUDE)
        assert assessment.quality_score == 100
        assert assessment.lossy is False
        assert assessment.warnings == ()

    def test_dropped_tools(self):
        pkg = make_package(InstructionsSection(content='x'), ToolsSection(tools=['Read']))
        assessment = assess(pkg, Dialect.CURSOR, CURSOR)
        assert assessment.quality_score == 75
        assert assessment.lossy is True
        assert assessment.warnings == ("Dropped tools section (Read): cursor has no tools concept",)

    def test_tools_kept_when_supported(self):
        pkg = make_package(ToolsSection(tools=['Read']))
        assert assess(pkg, Dialect.KIRO_AGENT, KIRO_AGENT).quality_score == 100

    def test_foreign_custom_section(self):
        pkg = make_package(CustomSection(content='abc', dialect='kiro'))
        assessment = assess(pkg, Dialect.CURSOR, CURSOR)
        assert assessment.quality_score == 85
        assert assessment.warnings == (
            "Dropped kiro content (3 characters) with no equivalent in cursor",
        )

    def test_custom_section_restored_in_own_dialect(self):
        pkg = make_package(CustomSection(content='abc', dialect='cursor'))
        assessment = assess(pkg, Dialect.CURSOR, CURSOR, source=Dialect.CURSOR)
        assert assessment.quality_score == 100
        assert not assessment.lossy

    def test_undeclared_custom_section(self):
        pkg = make_package(CustomSection(content='abc', title='notes'))
        assessment = assess(pkg, Dialect.CURSOR, CURSOR)
        assert assessment.warnings == (
            "Dropped undeclared dialect content 'notes' with no equivalent in cursor",
        )

    def test_executable_custom_always_penalized(self):
        pkg = make_package(CustomSection(content='{}', dialect='kiro-agent', title='hooks',
                                         executable=True))
        assessment = assess(pkg, Dialect.KIRO_AGENT, KIRO_AGENT, source=Dialect.KIRO_AGENT)
        assert assessment.quality_score == 85
        assert assessment.warnings[0].startswith("Dropped executable tool definition 'hooks'")

    def test_collapsed_rules(self):
        rules = RulesSection(items=[Rule('a'), Rule('b'), Rule('c')], title='Style')
        assessment = assess(make_package(rules), Dialect.KIRO_AGENT, KIRO_AGENT)
        assert assessment.quality_score == 70
        assert assessment.warnings == (
            "Collapsed 3 rule(s) from 'Style' into free text for kiro-agent",
        )
        assert len(assessment.penalties) == 3

    def test_lost_metadata_hints(self):
        metadata = MetadataSection(title='P', model='opus', globs=['*.py'])
        pkg = make_package(InstructionsSection(content='x'), metadata=metadata)
        assessment = assess(pkg, Dialect.CLAUDE, CLAUDE, source=Dialect.CURSOR)
        # Claude keeps the model but has no globs field
        assert assessment.quality_score == 95
        assert assessment.warnings == ("Lost globs hint: claude has no equivalent field",)

    def test_source_extra_fields(self):
        pkg = make_package(InstructionsSection(content='x'))
        pkg.dialect_configs[Dialect.CLAUDE] = ClaudeConfig(extra={'color': 'blue', 'hooks': 1})
        cross = assess(pkg, Dialect.CURSOR, CURSOR)
        same = assess(pkg, Dialect.CLAUDE, CLAUDE)
        assert cross.quality_score == 90
        assert "Lost claude field 'color': no equivalent in cursor" in cross.warnings
        assert same.quality_score == 100

    def test_content_floor_is_not_lossy(self):
        assessment = assess(make_package(), Dialect.CLAUDE, CLAUDE)
        assert assessment.quality_score == 90
        assert assessment.lossy is False
        assert assessment.warnings == (
            "Package has no content sections; only metadata was converted",
        )


class TestScoreBounds:

    def test_clamped_at_zero(self):
        sections = [ToolsSection(tools=[str(i)]) for i in range(5)]
        assessment = assess(make_package(*sections), Dialect.CURSOR, CURSOR)
        assert assessment.quality_score == 0
        assert assessment.lossy is True

    def test_more_custom_sections_never_score_higher(self):
        scores = []
        for count in range(8):
            customs = [CustomSection(content=str(i), dialect='kiro') for i in range(count)]
            scores.append(assess(make_package(*customs), Dialect.CURSOR, CURSOR).quality_score)
        assert scores == sorted(scores, reverse=True)
        assert all(0 <= score <= 100 for score in scores)


class TestPurity:

    def test_idempotent_and_no_mutation(self):
        pkg = make_package(
            InstructionsSection(content='x'),
            ToolsSection(tools=['Read']),
            CustomSection(content='y', dialect='copilot'),
        )
        snapshot = copy.deepcopy(pkg)
        first = assess(pkg, Dialect.CURSOR, CURSOR)
        second = assess(pkg, Dialect.CURSOR, CURSOR)
        assert first == second
        assert pkg == snapshot

    def test_format_mismatch(self):
        pkg = make_package(InstructionsSection(content='x'))
        with pytest.raises(ValueError, match="expected cursor"):
            assess_conversion(pkg, result_for(Dialect.CLAUDE), Dialect.CLAUDE,
                              Dialect.CURSOR, CURSOR)
