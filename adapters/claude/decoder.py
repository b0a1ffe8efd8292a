"""
Claude Code decoder.

Agents carry `name`, `description`, `tools` and `model` in frontmatter and
use the body as the system prompt. Slash commands carry `description`,
`allowed-tools` and `argument-hint` instead. Fields without a canonical slot
(`permissionMode`, `skills`, `argument-hint`, ...) are kept in ClaudeConfig.extra.
"""

from typing import Any, Dict

from core.canonical_models import ClaudeConfig, Dialect, Subtype, ToolsSection
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import normalize_model, parse_tools, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('name', 'description', 'tools', 'allowed-tools', 'model')
SLASH_COMMAND_FIELDS = ('argument-hint', 'allowed-tools')


class ClaudeDecoder(MarkdownDecoder):
    default_subtype = Subtype.AGENT

    @property
    def dialect(self) -> Dialect:
        return Dialect.CLAUDE

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        name = text_field(data, 'name')
        if name:
            builder.name = name
        builder.metadata.description = text_field(data, 'description')
        builder.metadata.model = normalize_model(data.get('model'))

        if 'name' not in data and any(field in data for field in SLASH_COMMAND_FIELDS):
            builder.subtype = Subtype.SLASH_COMMAND

        tools_key = 'allowed-tools' if 'allowed-tools' in data else 'tools'
        tools = parse_tools(data.get(tools_key))
        if tools:
            builder.add(ToolsSection(tools=tools))

        builder.set_config(ClaudeConfig(extra=split_known(data, KNOWN_FIELDS)))
