"""Kiro custom agents (JSON definitions with a free-text prompt)."""

from .adapter import KiroAgentAdapter
from .decoder import KiroAgentDecoder
from .encoder import KiroAgentEncoder

__all__ = ['KiroAgentAdapter', 'KiroAgentDecoder', 'KiroAgentEncoder']
