"""
Aider conventions encoder. Aider always reads the file as `CONVENTIONS.md`.
"""

from typing import Any, Dict

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType
from adapters.shared.markdown_dialect import PlainMarkdownEncoder

CONVENTIONS_FILENAME = "CONVENTIONS.md"

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
)


class AiderEncoder(PlainMarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.AIDER

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return CONVENTIONS_FILENAME
