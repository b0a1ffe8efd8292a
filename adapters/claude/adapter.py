"""
Claude Code format adapter - coordinator.

Pairs the Claude decoder and encoder and recognises files under `.claude/`.
"""

from pathlib import Path
from typing import List

from core.adapter_interface import DialectAdapter
from adapters.shared.frontmatter import peek_frontmatter
from core.canonical_models import Subtype
from .decoder import ClaudeDecoder
from .encoder import ClaudeEncoder


class ClaudeAdapter(DialectAdapter):
    """
    Adapter for Claude Code agents and slash commands.

    Agents live in `.claude/agents/*.md`, commands in `.claude/commands/*.md`.
    """

    def __init__(self):
        self._decoder = ClaudeDecoder()
        self._encoder = ClaudeEncoder()

    @property
    def decoder(self) -> ClaudeDecoder:
        return self._decoder

    @property
    def encoder(self) -> ClaudeEncoder:
        return self._encoder

    @property
    def file_extension(self) -> str:
        return ".md"

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return [Subtype.AGENT, Subtype.SLASH_COMMAND, Subtype.RULE, Subtype.PROMPT]

    def can_handle(self, file_path: Path) -> bool:
        """Claude files are .md files somewhere under a .claude directory."""
        return file_path.suffix == '.md' and '.claude' in file_path.parts

    def sniff(self, content: str) -> bool:
        data = peek_frontmatter(content)
        return any(key in data for key in ('name', 'tools', 'allowed-tools', 'model'))
