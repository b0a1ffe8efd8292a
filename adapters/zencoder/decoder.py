"""
Zencoder rule decoder. Frontmatter holds `description`, `globs` and
`alwaysApply`, all optional.
"""

from typing import Any, Dict

from core.canonical_models import Dialect, Subtype, ZencoderConfig
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_bool, parse_globs, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('description', 'globs', 'alwaysApply')


class ZencoderDecoder(MarkdownDecoder):
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.ZENCODER

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        builder.metadata.description = text_field(data, 'description')
        globs = parse_globs(data.get('globs'))
        builder.metadata.globs = list(globs)
        builder.set_config(ZencoderConfig(
            always_apply=parse_bool(data.get('alwaysApply')),
            globs=globs,
            extra=split_known(data, KNOWN_FIELDS),
        ))
