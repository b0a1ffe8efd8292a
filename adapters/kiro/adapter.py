"""
Kiro steering format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from adapters.shared.frontmatter import peek_frontmatter
from core.canonical_models import Subtype
from .decoder import KiroDecoder
from .encoder import KiroEncoder


class KiroAdapter(DialectAdapter):
    """Adapter for `.kiro/steering/*.md` files."""

    def __init__(self):
        self._decoder = KiroDecoder()
        self._encoder = KiroEncoder()

    @property
    def decoder(self) -> KiroDecoder:
        return self._decoder

    @property
    def encoder(self) -> KiroEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        parts = file_path.parts
        return file_path.suffix == '.md' and '.kiro' in parts and 'steering' in parts

    def sniff(self, content: str) -> bool:
        return 'inclusion' in peek_frontmatter(content)
