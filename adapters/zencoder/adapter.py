"""
Zencoder format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import ZencoderDecoder
from .encoder import ZencoderEncoder


class ZencoderAdapter(DialectAdapter):
    """Adapter for `.zencoder/rules/*.md` files."""

    def __init__(self):
        self._decoder = ZencoderDecoder()
        self._encoder = ZencoderEncoder()

    @property
    def decoder(self) -> ZencoderDecoder:
        return self._decoder

    @property
    def encoder(self) -> ZencoderEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.md' and '.zencoder' in file_path.parts
