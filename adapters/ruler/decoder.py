"""
Ruler decoder.

Ruler concatenates the markdown files in `.ruler/` and distributes them to
each agent's own config. Files written by this tool open with HTML comments
naming the package:

    <!-- Package: python-style -->
    <!-- Author: octocat -->
    <!-- Description: Python conventions -->

    # Python Style
    ...

The comments are read back into the package envelope; files without them
are plain markdown.
"""

import re

from core.canonical_models import Dialect, RulerConfig, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.markdown_dialect import PlainMarkdownDecoder

HEADER_PATTERN = re.compile(r'^<!--\s*(package|author|description):\s*(.*?)\s*-->\s*$',
                            re.IGNORECASE)


class RulerDecoder(PlainMarkdownDecoder):
    default_subtype = Subtype.RULE
    config_class = RulerConfig

    @property
    def dialect(self) -> Dialect:
        return Dialect.RULER

    def read_preamble(self, body: str, builder: PackageBuilder) -> str:
        lines = body.split('\n')
        consumed = 0
        for line in lines:
            if not line.strip():
                consumed += 1
                continue
            header = HEADER_PATTERN.match(line.strip())
            if not header:
                break
            key, value = header.group(1).lower(), header.group(2)
            if key == 'package':
                builder.name = value
            elif key == 'author':
                builder.metadata.author = value
            elif not builder.metadata.description:
                builder.metadata.description = value
            consumed += 1
        return '\n'.join(lines[consumed:])
