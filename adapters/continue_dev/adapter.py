"""
Continue format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from adapters.shared.frontmatter import peek_frontmatter
from .decoder import ContinueDecoder
from .encoder import ContinueEncoder


class ContinueAdapter(DialectAdapter):
    """Adapter for markdown rules and prompts under `.continue/`."""

    def __init__(self):
        self._decoder = ContinueDecoder()
        self._encoder = ContinueEncoder()

    @property
    def decoder(self) -> ContinueDecoder:
        return self._decoder

    @property
    def encoder(self) -> ContinueEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE, Subtype.PROMPT, Subtype.SLASH_COMMAND]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.md' and '.continue' in file_path.parts

    def sniff(self, content: str) -> bool:
        return 'invokable' in peek_frontmatter(content)
