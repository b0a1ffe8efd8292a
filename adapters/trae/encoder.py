"""
Trae rules encoder.
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


class TraeEncoder(PlainMarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.TRAE

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES
