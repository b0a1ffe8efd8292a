"""
Kiro agent format adapter - coordinator.
"""

import json
from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import KiroAgentDecoder
from .encoder import KiroAgentEncoder


class KiroAgentAdapter(DialectAdapter):
    """Adapter for `.kiro/agents/*.json` agent definitions."""

    def __init__(self):
        self._decoder = KiroAgentDecoder()
        self._encoder = KiroAgentEncoder()

    @property
    def decoder(self) -> KiroAgentDecoder:
        return self._decoder

    @property
    def encoder(self) -> KiroAgentEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".json"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.AGENT]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.json'

    def sniff(self, content: str) -> bool:
        """A JSON object naming the agent and giving it a prompt, tools or MCP servers."""
        try:
            data = json.loads(content)
        except ValueError:
            return False
        if not isinstance(data, dict) or not (data.get('name') or data.get('description')):
            return False
        return bool(data.get('prompt') or data.get('tools') or data.get('mcpServers'))
