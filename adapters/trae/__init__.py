"""Trae project rules (`.trae/rules/*.md`)."""

from .adapter import TraeAdapter
from .decoder import TraeDecoder
from .encoder import TraeEncoder

__all__ = ['TraeAdapter', 'TraeDecoder', 'TraeEncoder']
