"""
Trae rules decoder. Trae project rules are plain markdown files under
`.trae/rules/`.
"""

from core.canonical_models import Dialect, Subtype, TraeConfig
from adapters.shared.markdown_dialect import PlainMarkdownDecoder


class TraeDecoder(PlainMarkdownDecoder):
    default_subtype = Subtype.RULE
    config_class = TraeConfig

    @property
    def dialect(self) -> Dialect:
        return Dialect.TRAE
