"""
Unit tests for canonical package persistence.
"""

import json
import pytest

from core.canonical_models import (
    CanonicalPackage, CursorConfig, CustomSection, Dialect, Example, ExamplesSection,
    InstructionsSection, MetadataSection, PersonaSection, Priority, Rule, RulesSection,
    Subtype, ToolsSection
)
from core.serialization import (
    SCHEMA_VERSION, dumps, loads, package_from_dict, package_to_dict, section_from_dict
)


@pytest.fixture
def package():
    return CanonicalPackage(
        id='python-style',
        name='Python Style',
        description='Conventions',
        tags=['python'],
        format=Dialect.CURSOR,
        subtype=Subtype.RULE,
        source_format=Dialect.CURSOR,
        sections=[
            MetadataSection(title='Python Style', globs=['**/*.py']),
            InstructionsSection(content='Be consistent.', priority=Priority.HIGH),
            RulesSection(items=[Rule('Use hints', rationale='clarity', examples=['x: int'])]),
            ExamplesSection(examples=[Example(code='x = 1', language='python', good=True)]),
            ToolsSection(tools=['Read']),
            PersonaSection(role='a reviewer', style=['terse']),
            CustomSection(content='<!-- raw -->', dialect='cursor', metadata={'line': 3}),
        ],
        dialect_configs={Dialect.CURSOR: CursorConfig(always_apply=False, globs=['**/*.py'])},
        format_scores={Dialect.CLAUDE: 95},
    )


class TestSerialization:

    def test_dumps_loads_equal(self, package):
        assert loads(dumps(package)) == package

    def test_document_shape(self, package):
        data = json.loads(dumps(package))
        assert data['format'] == 'canonical'
        assert data['version'] == SCHEMA_VERSION
        assert data['package']['sections'][2]['type'] == 'rules'
        assert data['package']['dialectConfigs']['cursor']['always_apply'] is False
        assert data['package']['formatScores'] == {'claude': 95}

    def test_unsupported_version(self, package):
        data = package_to_dict(package)
        data['version'] = '2.0'
        with pytest.raises(ValueError, match="Unsupported canonical schema version"):
            package_from_dict(data)

    def test_not_a_canonical_document(self):
        with pytest.raises(ValueError, match="Not a canonical package"):
            package_from_dict({'format': 'cursor'})

    def test_unknown_section_type(self):
        with pytest.raises(ValueError, match="Unknown section type"):
            section_from_dict({'type': 'diagram', 'content': 'x'})

    def test_frontmatter_dates_stored_as_iso_strings(self):
        from adapters import CursorAdapter

        pkg, _ = CursorAdapter().decode(
            "---\ndescription: Dated rule\nalwaysApply: true\ncreated: 2024-01-01\n---\n"
            "# Dated\n\nBody\n"
        )
        document = json.loads(dumps(pkg))
        stored = document['package']['dialectConfigs']['cursor']['extra']
        assert stored == {'created': '2024-01-01'}
        assert loads(dumps(pkg)).config_for(Dialect.CURSOR).extra == {'created': '2024-01-01'}
