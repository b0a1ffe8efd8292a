"""
Cursor rule decoder.

Reads `.mdc` files:

    ---
    description: React component conventions
    globs:
      - src/**/*.tsx
    alwaysApply: false
    ---
    # React Components
    ...
"""

from typing import Any, Dict

from core.canonical_models import CursorConfig, Dialect, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_bool, parse_globs, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('description', 'globs', 'alwaysApply')


class CursorDecoder(MarkdownDecoder):
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.CURSOR

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        builder.metadata.description = text_field(data, 'description')

        globs = parse_globs(data.get('globs'))
        builder.metadata.globs = list(globs)

        always_apply = parse_bool(data.get('alwaysApply'))
        if 'alwaysApply' in data and always_apply is None:
            builder.warn(f"Ignoring non-boolean alwaysApply value: {data['alwaysApply']!r}")

        builder.set_config(CursorConfig(
            always_apply=always_apply,
            globs=globs,
            extra=split_known(data, KNOWN_FIELDS),
        ))
