"""
Claude Code encoder.

Renders agents (`name`/`description`/`tools`/`model`) or, for slash-command
packages, commands (`description`/`allowed-tools`). The body is the prompt
itself, so no `#` title is emitted.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType, Subtype
from adapters.shared.markdown_dialect import (
    MarkdownEncoder, description_of, metadata_of, package_slug, tools_of
)

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.TOOLS, SectionType.PERSONA,
        SectionType.CONTEXT, SectionType.CUSTOM,
    }),
    metadata_fields=frozenset({'model'}),
)


class ClaudeEncoder(MarkdownEncoder):
    include_title = False

    @property
    def dialect(self) -> Dialect:
        return Dialect.CLAUDE

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        slash_command = pkg.subtype == Subtype.SLASH_COMMAND
        frontmatter: Dict[str, Any] = {}
        if not slash_command:
            frontmatter['name'] = package_slug(pkg, options)
        frontmatter['description'] = description_of(pkg)

        tools = tools_of(pkg)
        if tools:
            frontmatter['allowed-tools' if slash_command else 'tools'] = ', '.join(tools)

        model = options.get('model') or metadata_of(pkg).model
        if model:
            frontmatter['model'] = model

        config = pkg.config_for(Dialect.CLAUDE)
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter
