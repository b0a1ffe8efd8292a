"""Zencoder rules (`.zencoder/rules/*.md`)."""

from .adapter import ZencoderAdapter
from .decoder import ZencoderDecoder
from .encoder import ZencoderEncoder

__all__ = ['ZencoderAdapter', 'ZencoderDecoder', 'ZencoderEncoder']
