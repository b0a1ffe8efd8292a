"""
AGENTS.md encoder.

Renders plain markdown. Frontmatter with `project`/`scope` is only written
when asked for (`include_frontmatter`) or when the source file had it.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType
from adapters.shared.fields import parse_bool, pick_option
from adapters.shared.markdown_dialect import MarkdownEncoder

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
)


class AgentsMdEncoder(MarkdownEncoder):
    include_description = True

    @property
    def dialect(self) -> Dialect:
        return Dialect.AGENTS_MD

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.AGENTS_MD)
        include = parse_bool(pick_option(options, 'include_frontmatter'))
        if include is None:
            include = bool(config and config.include_frontmatter)
        if not include:
            return {}

        frontmatter: Dict[str, Any] = {}
        project = pick_option(options, 'project') or (config.project if config else None)
        scope = pick_option(options, 'scope') or (config.scope if config else None)
        if project:
            frontmatter['project'] = project
        if scope:
            frontmatter['scope'] = scope
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return "AGENTS.md"
