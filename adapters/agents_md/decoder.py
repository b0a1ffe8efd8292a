"""
AGENTS.md decoder.

Plain markdown; the paragraph under the title is the description. Optional
frontmatter may declare `project` and `scope`.
"""

from typing import Any, Dict

from core.canonical_models import AgentsMdConfig, Dialect, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('project', 'scope', 'description')


class AgentsMdDecoder(MarkdownDecoder):
    lead_description = True
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.AGENTS_MD

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        builder.metadata.description = text_field(data, 'description')
        builder.set_config(AgentsMdConfig(
            project=text_field(data, 'project') or None,
            scope=text_field(data, 'scope') or None,
            include_frontmatter=bool(data),
            extra=split_known(data, KNOWN_FIELDS),
        ))
