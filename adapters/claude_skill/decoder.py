"""
Claude skill decoder.

Skill frontmatter is strict: `name` must be lowercase letters, digits and
hyphens (at most 64 characters) and `description` is required, at most 1024
characters. Violations are reported as warnings; decoding still succeeds.
"""

import re
from typing import Any, Dict

from core.canonical_models import ClaudeSkillConfig, Dialect, Subtype, ToolsSection
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_tools, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

SKILL_NAME_PATTERN = re.compile(r'^[a-z0-9-]{1,64}$')
MAX_DESCRIPTION_LENGTH = 1024
KNOWN_FIELDS = ('name', 'description', 'allowed-tools')


class ClaudeSkillDecoder(MarkdownDecoder):
    default_subtype = Subtype.SKILL

    @property
    def dialect(self) -> Dialect:
        return Dialect.CLAUDE_SKILL

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        name = text_field(data, 'name')
        if not name:
            builder.warn("Skill frontmatter is missing required field 'name'")
        elif not SKILL_NAME_PATTERN.match(name):
            builder.warn(f"Skill name '{name}' must be 1-64 lowercase letters, digits or hyphens")
        if name:
            builder.name = name

        description = text_field(data, 'description')
        if not description:
            builder.warn("Skill frontmatter is missing required field 'description'")
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            builder.warn(f"Skill description is {len(description)} characters; "
                         f"the limit is {MAX_DESCRIPTION_LENGTH}")
        builder.metadata.description = description

        tools = parse_tools(data.get('allowed-tools'))
        if tools:
            builder.add(ToolsSection(tools=tools))

        builder.set_config(ClaudeSkillConfig(extra=split_known(data, KNOWN_FIELDS)))
