"""
GitHub Copilot format adapter - coordinator.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from adapters.shared.frontmatter import peek_frontmatter
from core.canonical_models import Subtype
from .decoder import CopilotDecoder, INSTRUCTIONS_SUFFIX
from .encoder import CopilotEncoder


class CopilotAdapter(DialectAdapter):
    """
    Adapter for Copilot instructions.

    Path-scoped files live in `.github/instructions/*.instructions.md`; the
    repository-wide file is `.github/copilot-instructions.md`.
    """

    def __init__(self):
        self._decoder = CopilotDecoder()
        self._encoder = CopilotEncoder()

    @property
    def decoder(self) -> CopilotDecoder:
        return self._decoder

    @property
    def encoder(self) -> CopilotEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return INSTRUCTIONS_SUFFIX

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.RULE, Subtype.PROMPT, Subtype.CHATMODE]

    def can_handle(self, file_path: Path) -> bool:
        return (file_path.name.endswith(INSTRUCTIONS_SUFFIX) or
                file_path.name == 'copilot-instructions.md')

    def sniff(self, content: str) -> bool:
        return 'applyTo' in peek_frontmatter(content)
