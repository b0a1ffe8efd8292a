"""
Helpers shared by dialect adapters: frontmatter, markdown parsing and
rendering, field normalization and the per-call package builder.
"""

from .builder import PackageBuilder
from .markdown_dialect import MarkdownDecoder, MarkdownEncoder

__all__ = [
    'PackageBuilder',
    'MarkdownDecoder',
    'MarkdownEncoder',
]
