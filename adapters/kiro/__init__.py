"""Kiro steering files (`.kiro/steering/*.md` with an inclusion mode)."""

from .adapter import KiroAdapter
from .decoder import KiroDecoder
from .encoder import KiroEncoder

__all__ = ['KiroAdapter', 'KiroDecoder', 'KiroEncoder']
