"""
Factory Droid encoder. Droids get `name`/`description`/`model`/`tools`;
slash-command packages become commands with `allowed-tools`.
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


class DroidEncoder(MarkdownEncoder):
    include_title = False

    @property
    def dialect(self) -> Dialect:
        return Dialect.DROID

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.DROID)
        command = pkg.subtype == Subtype.SLASH_COMMAND
        frontmatter: Dict[str, Any] = {}
        if not command:
            frontmatter['name'] = package_slug(pkg, options)
        frontmatter['description'] = description_of(pkg)

        model = options.get('model') or metadata_of(pkg).model
        if model and not command:
            frontmatter['model'] = model

        tools = tools_of(pkg)
        if tools:
            frontmatter['allowed-tools' if command else 'tools'] = tools

        if command and config is not None and config.argument_hint:
            frontmatter['argument-hint'] = config.argument_hint

        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter
