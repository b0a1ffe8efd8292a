"""Cursor rule files (`.mdc` with description/globs/alwaysApply frontmatter)."""

from .adapter import CursorAdapter
from .decoder import CursorDecoder
from .encoder import CursorEncoder

__all__ = ['CursorAdapter', 'CursorDecoder', 'CursorEncoder']
