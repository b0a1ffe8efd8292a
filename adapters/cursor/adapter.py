"""
Cursor format adapter - coordinator.

Pairs the Cursor decoder and encoder and recognises Cursor rule files.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from adapters.shared.frontmatter import peek_frontmatter
from core.canonical_models import Subtype
from .decoder import CursorDecoder
from .encoder import CursorEncoder


class CursorAdapter(DialectAdapter):
    """Adapter for Cursor rules (.cursor/rules/*.mdc and legacy .cursorrules)."""

    def __init__(self):
        self._decoder = CursorDecoder()
        self._encoder = CursorEncoder()

    @property
    def decoder(self) -> CursorDecoder:
        return self._decoder

    @property
    def encoder(self) -> CursorEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".mdc"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE, Subtype.AGENT, Subtype.PROMPT]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.mdc' or file_path.name == '.cursorrules'

    def sniff(self, content: str) -> bool:
        data = peek_frontmatter(content)
        return 'alwaysApply' in data or ('globs' in data and 'name' not in data)
