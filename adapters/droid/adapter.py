"""
Factory Droid format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import DroidDecoder
from .encoder import DroidEncoder


class DroidAdapter(DialectAdapter):
    """Adapter for droids and commands under `.factory/`."""

    def __init__(self):
        self._decoder = DroidDecoder()
        self._encoder = DroidEncoder()

    @property
    def decoder(self) -> DroidDecoder:
        return self._decoder

    @property
    def encoder(self) -> DroidEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.AGENT, Subtype.SLASH_COMMAND]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.md' and '.factory' in file_path.parts
