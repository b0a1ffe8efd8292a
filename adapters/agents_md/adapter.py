"""
AGENTS.md format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from adapters.shared.frontmatter import peek_frontmatter
from core.canonical_models import Subtype
from .decoder import AgentsMdDecoder
from .encoder import AgentsMdEncoder


class AgentsMdAdapter(DialectAdapter):
    """Adapter for `AGENTS.md` files at a project or directory root."""

    def __init__(self):
        self._decoder = AgentsMdDecoder()
        self._encoder = AgentsMdEncoder()

    @property
    def decoder(self) -> AgentsMdDecoder:
        return self._decoder

    @property
    def encoder(self) -> AgentsMdEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE, Subtype.AGENT]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.name.upper() == 'AGENTS.MD'

    def sniff(self, content: str) -> bool:
        data = peek_frontmatter(content)
        return 'project' in data or 'scope' in data
