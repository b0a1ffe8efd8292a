"""Ruler source files (`.ruler/*.md`)."""

from .adapter import RulerAdapter
from .decoder import RulerDecoder
from .encoder import RulerEncoder

__all__ = ['RulerAdapter', 'RulerDecoder', 'RulerEncoder']
