"""
Generic markdown format adapter - coordinator.
"""

from pathlib import Path

from core.adapter_interface import DialectAdapter
from adapters.shared.markdown_parser import HEADING_PATTERN
from .decoder import GenericDecoder
from .encoder import GenericEncoder


class GenericAdapter(DialectAdapter):
    """Fallback adapter for any markdown file."""

    def __init__(self):
        self._decoder = GenericDecoder()
        self._encoder = GenericEncoder()

    @property
    def decoder(self) -> GenericDecoder:
        return self._decoder

    @property
    def encoder(self) -> GenericEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix in ('.md', '.markdown')

    def sniff(self, content: str) -> bool:
        """Any document with a markdown heading."""
        return any(HEADING_PATTERN.match(line) for line in content.splitlines())
