"""
Versioned persistence shape for canonical packages.

Stored canonical content is structured data rather than dialect text, so a
package can be re-encoded into a newly supported dialect without going back
to its original source:

    {
      "format": "canonical",
      "version": "1.0",
      "package": {
        "id": "...", "name": "...", ...,
        "sections": [{"type": "rules", "title": "Rules", "items": [...]}, ...],
        "dialectConfigs": {"cursor": {"always_apply": false, ...}}
      }
    }
"""

import json
from dataclasses import asdict, fields
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict

from .canonical_models import (
    DIALECT_CONFIG_CLASSES, SECTION_CLASSES, CanonicalPackage, Dialect, Example,
    Priority, Rule, SectionType, Subtype
)

SCHEMA_FORMAT = "canonical"
SCHEMA_VERSION = "1.0"


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime, time)):
        # YAML frontmatter yields these for unquoted timestamps
        return value.isoformat()
    if isinstance(value, dict):
        return {(_plain(k)): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def section_to_dict(section) -> Dict[str, Any]:
    data = {'type': section.type.value}
    data.update(_plain(asdict(section)))
    return data


def section_from_dict(data: Dict[str, Any]):
    """
    Rebuild a section from its stored form.

    Raises:
        ValueError: If the type tag is unknown
    """
    try:
        section_type = SectionType(data.get('type'))
    except ValueError:
        raise ValueError(f"Unknown section type: {data.get('type')!r}")

    cls = SECTION_CLASSES[section_type]
    names = {f.name for f in fields(cls)}
    values = {k: v for k, v in data.items() if k in names}

    if section_type == SectionType.RULES:
        values['items'] = [Rule(**item) for item in values.get('items', [])]
    elif section_type == SectionType.EXAMPLES:
        values['examples'] = [Example(**example) for example in values.get('examples', [])]
    elif section_type == SectionType.INSTRUCTIONS and 'priority' in values:
        values['priority'] = Priority(values['priority'])
    return cls(**values)


def package_to_dict(pkg: CanonicalPackage) -> Dict[str, Any]:
    return {
        'format': SCHEMA_FORMAT,
        'version': SCHEMA_VERSION,
        'package': {
            'id': pkg.id,
            'name': pkg.name,
            'version': pkg.version,
            'description': pkg.description,
            'author': pkg.author,
            'tags': list(pkg.tags),
            'format': pkg.format.value,
            'subtype': pkg.subtype.value,
            'sourceFormat': pkg.source_format.value if pkg.source_format else None,
            'sourceUrl': pkg.source_url,
            'official': pkg.official,
            'verified': pkg.verified,
            'formatScores': {d.value: score for d, score in pkg.format_scores.items()},
            'dialectConfigs': {d.value: _plain(asdict(config))
                               for d, config in pkg.dialect_configs.items()},
            'sections': [section_to_dict(section) for section in pkg.sections],
        },
    }


def package_from_dict(data: Dict[str, Any]) -> CanonicalPackage:
    """
    Rebuild a package from its stored form.

    Raises:
        ValueError: If the document is not a canonical package of a
            supported schema version
    """
    if data.get('format') != SCHEMA_FORMAT:
        raise ValueError(f"Not a canonical package document: format={data.get('format')!r}")
    if data.get('version') != SCHEMA_VERSION:
        raise ValueError(f"Unsupported canonical schema version: {data.get('version')!r}")

    body = data.get('package') or {}
    configs = {}
    for name, values in (body.get('dialectConfigs') or {}).items():
        dialect = Dialect.parse(name)
        configs[dialect] = DIALECT_CONFIG_CLASSES[dialect](**values)

    source_format = body.get('sourceFormat')
    return CanonicalPackage(
        id=body.get('id') or 'package',
        name=body.get('name') or 'untitled',
        version=body.get('version') or '1.0.0',
        description=body.get('description') or '',
        author=body.get('author'),
        tags=list(body.get('tags') or []),
        format=Dialect.parse(body.get('format') or Dialect.GENERIC),
        subtype=Subtype(body.get('subtype') or Subtype.RULE.value),
        sections=[section_from_dict(section) for section in body.get('sections') or []],
        dialect_configs=configs,
        format_scores={Dialect.parse(k): v for k, v in (body.get('formatScores') or {}).items()},
        source_format=Dialect.parse(source_format) if source_format else None,
        source_url=body.get('sourceUrl'),
        official=bool(body.get('official', False)),
        verified=bool(body.get('verified', False)),
    )


def dumps(pkg: CanonicalPackage, indent: int = 2) -> str:
    return json.dumps(package_to_dict(pkg), indent=indent, ensure_ascii=False)


def loads(text: str) -> CanonicalPackage:
    return package_from_dict(json.loads(text))
