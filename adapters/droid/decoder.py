"""
Factory Droid decoder.

Custom droids (`.factory/droids/*.md`) carry `name`, `description`, `model`
and `tools`; commands (`.factory/commands/*.md`) carry `description`,
`allowed-tools` and `argument-hint`. The body is the prompt.
"""

from typing import Any, Dict

from core.canonical_models import Dialect, DroidConfig, Subtype, ToolsSection
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import normalize_model, parse_tools, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('name', 'description', 'tools', 'allowed-tools', 'model', 'argument-hint')


class DroidDecoder(MarkdownDecoder):
    default_subtype = Subtype.AGENT

    @property
    def dialect(self) -> Dialect:
        return Dialect.DROID

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        name = text_field(data, 'name')
        if name:
            builder.name = name
        builder.metadata.description = text_field(data, 'description')
        builder.metadata.model = normalize_model(data.get('model'))

        argument_hint = text_field(data, 'argument-hint') or None
        if 'name' not in data and ('allowed-tools' in data or argument_hint):
            builder.subtype = Subtype.SLASH_COMMAND

        tools_key = 'allowed-tools' if 'allowed-tools' in data else 'tools'
        tools = parse_tools(data.get(tools_key))
        if tools:
            builder.add(ToolsSection(tools=tools))

        builder.set_config(DroidConfig(
            argument_hint=argument_hint,
            extra=split_known(data, KNOWN_FIELDS),
        ))
