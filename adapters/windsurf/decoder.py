"""
Windsurf rules decoder.

Windsurf reads plain markdown without frontmatter, either from a single
`.windsurfrules` file at the project root or from `.windsurf/rules/*.md`:

    # TypeScript Conventions

    Rules for the web client.

    ## Rules

    - Prefer `unknown` over `any`
"""

from core.canonical_models import Dialect, Subtype, WindsurfConfig
from adapters.shared.markdown_dialect import PlainMarkdownDecoder


class WindsurfDecoder(PlainMarkdownDecoder):
    default_subtype = Subtype.RULE
    config_class = WindsurfConfig

    @property
    def dialect(self) -> Dialect:
        return Dialect.WINDSURF
