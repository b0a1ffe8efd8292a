"""
Gemini CLI format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from tomlkit.exceptions import TOMLKitError

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import GeminiDecoder, load_command
from .encoder import GeminiEncoder


class GeminiAdapter(DialectAdapter):
    """Adapter for `.gemini/commands/*.toml` custom commands."""

    def __init__(self):
        self._decoder = GeminiDecoder()
        self._encoder = GeminiEncoder()

    @property
    def decoder(self) -> GeminiDecoder:
        return self._decoder

    @property
    def encoder(self) -> GeminiEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".toml"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.SLASH_COMMAND]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix == '.toml' and '.gemini' in file_path.parts

    def sniff(self, content: str) -> bool:
        try:
            data = load_command(content)
        except TOMLKitError:
            return False
        return isinstance(data.get('prompt'), str)
