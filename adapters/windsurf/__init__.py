"""Windsurf rules (`.windsurfrules`, `.windsurf/rules/*.md`)."""

from .adapter import WindsurfAdapter
from .decoder import WindsurfDecoder
from .encoder import WindsurfEncoder

__all__ = ['WindsurfAdapter', 'WindsurfDecoder', 'WindsurfEncoder']
