"""
Generic markdown decoder, the fallback for files no other dialect claims.

Frontmatter is optional; `title`/`name` and `description` are read from it
and anything else is kept in GenericConfig.extra.
"""

from core.canonical_models import Dialect, GenericConfig, Subtype
from adapters.shared.markdown_dialect import PlainMarkdownDecoder


class GenericDecoder(PlainMarkdownDecoder):
    default_subtype = Subtype.PROMPT
    config_class = GenericConfig

    @property
    def dialect(self) -> Dialect:
        return Dialect.GENERIC
