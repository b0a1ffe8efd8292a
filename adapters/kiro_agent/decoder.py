"""
Kiro agent decoder.

Agent definitions are JSON objects:

    {
      "name": "reviewer",
      "description": "Reviews pull requests",
      "prompt": "You are a careful reviewer...",
      "tools": ["fs_read", "execute_bash"],
      "mcpServers": {"fetch": {"command": "uvx", "args": ["mcp-server-fetch"]}},
      "model": "claude-sonnet-4"
    }

The prompt is free text: its headings and code blocks are parsed, but lists
are not promoted to rules. `mcpServers` and `hooks` define executable tools
and are kept as executable custom sections. Input that is not a JSON object
is preserved whole.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

from core.adapter_interface import DialectDecoder
from core.canonical_models import (
    CanonicalPackage, Dialect, KiroAgentConfig, Subtype, ToolsSection
)
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import normalize_model, parse_tools, split_known
from adapters.shared.markdown_parser import parse_body

logger = logging.getLogger(__name__)

EXECUTABLE_FIELDS = ('mcpServers', 'hooks')
KNOWN_FIELDS = ('name', 'description', 'prompt', 'tools', 'model') + EXECUTABLE_FIELDS


class KiroAgentDecoder(DialectDecoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.KIRO_AGENT

    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        builder = PackageBuilder(Dialect.KIRO_AGENT, hints)

        data: Any = raw
        if isinstance(raw, str):
            try:
                data = json.loads(raw) if raw.strip() else {}
            except json.JSONDecodeError as e:
                logger.debug("Agent definition is not valid JSON: %s", e)
                builder.preserve(raw, title='agent')
                return builder.build(Subtype.AGENT), builder.warnings

        if not isinstance(data, dict):
            builder.preserve(json.dumps(data, indent=2), title='agent')
            return builder.build(Subtype.AGENT), builder.warnings

        name = data.get('name')
        if name:
            builder.name = str(name)
        builder.metadata.description = str(data.get('description') or '').strip()
        builder.metadata.model = normalize_model(data.get('model'))

        prompt = data.get('prompt')
        if isinstance(prompt, str):
            parse_body(prompt, builder, detect_rules=False)
        elif prompt is not None:
            builder.preserve(json.dumps(prompt, indent=2), title='prompt')

        tools = parse_tools(data.get('tools'))
        if tools:
            builder.add(ToolsSection(tools=tools))

        for field in EXECUTABLE_FIELDS:
            value = data.get(field)
            if value:
                builder.preserve(
                    json.dumps(value, indent=2),
                    title=field,
                    metadata={'field': field},
                    executable=True,
                    report=False,
                )

        builder.set_config(KiroAgentConfig(extra=split_known(data, KNOWN_FIELDS)))
        return builder.build(Subtype.AGENT), builder.warnings
