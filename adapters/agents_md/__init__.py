"""AGENTS.md project instruction files."""

from .adapter import AgentsMdAdapter
from .decoder import AgentsMdDecoder
from .encoder import AgentsMdEncoder

__all__ = ['AgentsMdAdapter', 'AgentsMdDecoder', 'AgentsMdEncoder']
