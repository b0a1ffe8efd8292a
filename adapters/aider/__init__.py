"""Aider conventions files (`CONVENTIONS.md`)."""

from .adapter import AiderAdapter
from .decoder import AiderDecoder
from .encoder import AiderEncoder

__all__ = ['AiderAdapter', 'AiderDecoder', 'AiderEncoder']
