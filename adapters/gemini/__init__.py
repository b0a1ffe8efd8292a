"""Gemini CLI custom commands (`.gemini/commands/*.toml`)."""

from .adapter import GeminiAdapter
from .decoder import GeminiDecoder
from .encoder import GeminiEncoder

__all__ = ['GeminiAdapter', 'GeminiDecoder', 'GeminiEncoder']
