"""Continue rules and prompts (`.continue/rules/*.md`, `.continue/prompts/*.md`)."""

from .adapter import ContinueAdapter
from .decoder import ContinueDecoder
from .encoder import ContinueEncoder

__all__ = ['ContinueAdapter', 'ContinueDecoder', 'ContinueEncoder']
