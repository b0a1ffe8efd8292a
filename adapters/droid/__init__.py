"""Factory Droid custom droids and commands (`.factory/`)."""

from .adapter import DroidAdapter
from .decoder import DroidDecoder
from .encoder import DroidEncoder

__all__ = ['DroidAdapter', 'DroidDecoder', 'DroidEncoder']
