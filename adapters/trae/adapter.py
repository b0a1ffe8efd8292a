"""
Trae format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import TraeDecoder
from .encoder import TraeEncoder


class TraeAdapter(DialectAdapter):
    """Adapter for `.trae/rules/*.md` files."""

    def __init__(self):
        self._decoder = TraeDecoder()
        self._encoder = TraeEncoder()

    @property
    def decoder(self) -> TraeDecoder:
        return self._decoder

    @property
    def encoder(self) -> TraeEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        parts = file_path.parts
        return file_path.suffix == '.md' and '.trae' in parts and 'rules' in parts
