"""Claude Code agents and slash commands (markdown with YAML frontmatter)."""

from .adapter import ClaudeAdapter
from .decoder import ClaudeDecoder
from .encoder import ClaudeEncoder

__all__ = ['ClaudeAdapter', 'ClaudeDecoder', 'ClaudeEncoder']
