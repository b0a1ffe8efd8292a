"""
Aider format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import AiderDecoder
from .encoder import CONVENTIONS_FILENAME, AiderEncoder


class AiderAdapter(DialectAdapter):
    """Adapter for Aider `CONVENTIONS.md` files."""

    def __init__(self):
        self._decoder = AiderDecoder()
        self._encoder = AiderEncoder()

    @property
    def decoder(self) -> AiderDecoder:
        return self._decoder

    @property
    def encoder(self) -> AiderEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.name.upper() == CONVENTIONS_FILENAME.upper()
