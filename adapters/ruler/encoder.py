"""
Ruler encoder: package header comments, then the title and sections. The
description lives in the header, not in a paragraph.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType
from adapters.shared.markdown_dialect import PlainMarkdownEncoder, description_of

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
)


def _one_line(text: str) -> str:
    # A comment cannot span lines or contain its own terminator
    return ' '.join(text.split()).replace('-->', '->')


class RulerEncoder(PlainMarkdownEncoder):
    include_description = False

    @property
    def dialect(self) -> Dialect:
        return Dialect.RULER

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def render(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        header: List[str] = [f"<!-- Package: {_one_line(pkg.name)} -->"]
        if pkg.author:
            header.append(f"<!-- Author: {_one_line(pkg.author)} -->")
        description = description_of(pkg)
        if description:
            header.append(f"<!-- Description: {_one_line(description)} -->")
        body = super().render(pkg, options)
        return '\n'.join(header) + ('\n\n' + body if body else '')
