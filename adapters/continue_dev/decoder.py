"""
Continue decoder.

    ---
    name: API conventions
    description: REST naming rules
    globs: src/api/**/*.ts
    alwaysApply: false
    ---
    # API Conventions
    ...

Prompt files set `invokable: true` and run as slash commands.
"""

from typing import Any, Dict

from core.canonical_models import ContinueConfig, Dialect, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_bool, parse_globs, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('name', 'description', 'globs', 'alwaysApply', 'invokable')


class ContinueDecoder(MarkdownDecoder):
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.CONTINUE

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        name = text_field(data, 'name')
        if name:
            builder.name = name
        builder.metadata.description = text_field(data, 'description')

        globs = parse_globs(data.get('globs'))
        builder.metadata.globs = list(globs)

        invokable = parse_bool(data.get('invokable'))
        if invokable:
            builder.subtype = Subtype.SLASH_COMMAND

        builder.set_config(ContinueConfig(
            always_apply=parse_bool(data.get('alwaysApply')),
            globs=globs,
            invokable=invokable,
            extra=split_known(data, KNOWN_FIELDS),
        ))
