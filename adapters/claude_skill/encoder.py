"""
Claude skill encoder.

A skill is only discovered through its description, so an empty description
is a missing required option rather than something to default.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType
from core.errors import MissingRequiredOption
from adapters.shared.fields import pick_option, slugify
from adapters.shared.markdown_dialect import MarkdownEncoder, description_of, tools_of
from .decoder import MAX_DESCRIPTION_LENGTH

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.TOOLS, SectionType.PERSONA,
        SectionType.CONTEXT, SectionType.CUSTOM,
    }),
)


class ClaudeSkillEncoder(MarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.CLAUDE_SKILL

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        description = str(pick_option(options, 'description') or description_of(pkg)).strip()
        if not description:
            raise MissingRequiredOption(
                'claude-skill', 'description', 'skills are discovered through their description'
            )
        if len(description) > MAX_DESCRIPTION_LENGTH:
            warnings.append(f"Skill description truncated to {MAX_DESCRIPTION_LENGTH} characters")
            description = description[:MAX_DESCRIPTION_LENGTH].rstrip()

        name = slugify(pick_option(options, 'name') or pkg.name) or slugify(pkg.id) or 'skill'
        frontmatter: Dict[str, Any] = {'name': name, 'description': description}

        tools = tools_of(pkg)
        if tools:
            frontmatter['allowed-tools'] = ', '.join(tools)

        config = pkg.config_for(Dialect.CLAUDE_SKILL)
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return "SKILL.md"
