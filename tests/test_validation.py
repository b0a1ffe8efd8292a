"""
Unit tests for structural validation.
"""

from core.canonical_models import (
    CanonicalPackage, CustomSection, Example, ExamplesSection, InstructionsSection,
    MetadataSection, RulesSection
)
from core.validation import ValidationError, is_valid, validate


def make_package(*sections):
    return CanonicalPackage(id='p', name='P', sections=list(sections))


class TestValidate:
    """Tests for validate()."""

    def test_valid_package(self):
        pkg = make_package(MetadataSection(title='P'), InstructionsSection(content='Do it.'))
        assert validate(pkg) == []
        assert is_valid(pkg)

    def test_empty_sections(self):
        errors = validate(make_package())
        assert errors == [ValidationError('sections', 'package has no sections')]

    def test_missing_metadata(self):
        errors = validate(make_package(InstructionsSection(content='Do it.')))
        assert [e.message for e in errors] == ['package has no metadata section']

    def test_rules_without_items(self):
        pkg = make_package(MetadataSection(), RulesSection(items=[], title='Conventions'))
        errors = validate(pkg)
        assert len(errors) == 1
        assert errors[0].path == 'sections[1]'
        assert "'Conventions' has no items" in errors[0].message

    def test_example_without_code(self):
        pkg = make_package(
            MetadataSection(),
            ExamplesSection(examples=[Example(code='x = 1'), Example(code='   ')]),
        )
        errors = validate(pkg)
        assert [str(e) for e in errors] == ['sections[1].examples[1]: example has no code']

    def test_custom_with_unknown_dialect(self):
        pkg = make_package(
            MetadataSection(),
            CustomSection(content='a', dialect='cursor'),
            CustomSection(content='b', dialect='windsurf'),
            CustomSection(content='c'),
        )
        messages = [str(e) for e in validate(pkg)]
        assert messages == [
            "sections[2]: custom section has unknown dialect 'windsurf'",
            'sections[3]: custom section declares no dialect',
        ]
        assert not is_valid(pkg)

    def test_validate_does_not_raise_on_many_problems(self):
        pkg = make_package(RulesSection(items=[]), CustomSection(content='x', dialect='?'))
        assert len(validate(pkg)) == 3
