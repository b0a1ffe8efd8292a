"""
Windsurf rules encoder: `# title`, description paragraph, then sections.
"""

from core.adapter_interface import DialectCapabilities
from core.canonical_models import Dialect, SectionType
from adapters.shared.markdown_dialect import PlainMarkdownEncoder

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
)


class WindsurfEncoder(PlainMarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.WINDSURF

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES
