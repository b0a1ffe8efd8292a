"""
Claude skill format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from core.canonical_models import Subtype
from .decoder import ClaudeSkillDecoder
from .encoder import ClaudeSkillEncoder


class ClaudeSkillAdapter(DialectAdapter):
    """Adapter for `.claude/skills/<name>/SKILL.md` files."""

    def __init__(self):
        self._decoder = ClaudeSkillDecoder()
        self._encoder = ClaudeSkillEncoder()

    @property
    def decoder(self) -> ClaudeSkillDecoder:
        return self._decoder

    @property
    def encoder(self) -> ClaudeSkillEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.SKILL]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.name == 'SKILL.md'
