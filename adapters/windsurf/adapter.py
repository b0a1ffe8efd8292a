"""
Windsurf format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import WindsurfDecoder
from .encoder import WindsurfEncoder


class WindsurfAdapter(DialectAdapter):
    """Adapter for `.windsurfrules` and `.windsurf/rules/*.md`."""

    def __init__(self):
        self._decoder = WindsurfDecoder()
        self._encoder = WindsurfEncoder()

    @property
    def decoder(self) -> WindsurfDecoder:
        return self._decoder

    @property
    def encoder(self) -> WindsurfEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE]

    def can_handle(self, file_path: Path) -> bool:
        if file_path.name == '.windsurfrules':
            return True
        return file_path.suffix == '.md' and '.windsurf' in file_path.parts
