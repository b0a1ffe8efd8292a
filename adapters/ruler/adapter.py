"""
Ruler format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import HEADER_PATTERN, RulerDecoder
from .encoder import RulerEncoder


class RulerAdapter(DialectAdapter):
    """Adapter for markdown sources under `.ruler/`."""

    def __init__(self):
        self._decoder = RulerDecoder()
        self._encoder = RulerEncoder()

    @property
    def decoder(self) -> RulerDecoder:
        return self._decoder

    @property
    def encoder(self) -> RulerEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE, Subtype.AGENT]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.md' and '.ruler' in file_path.parts

    def sniff(self, content: str) -> bool:
        first = content.lstrip().split('\n', 1)[0].strip()
        match = HEADER_PATTERN.match(first)
        return match is not None and match.group(1).lower() == 'package'
