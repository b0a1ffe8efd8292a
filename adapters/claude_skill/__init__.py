"""Claude skills (`SKILL.md` with strict name/description frontmatter)."""

from .adapter import ClaudeSkillAdapter
from .decoder import ClaudeSkillDecoder
from .encoder import ClaudeSkillEncoder

__all__ = ['ClaudeSkillAdapter', 'ClaudeSkillDecoder', 'ClaudeSkillEncoder']
