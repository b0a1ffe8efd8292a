"""Generic markdown fallback dialect."""

from .adapter import GenericAdapter
from .decoder import GenericDecoder
from .encoder import GenericEncoder

__all__ = ['GenericAdapter', 'GenericDecoder', 'GenericEncoder']
