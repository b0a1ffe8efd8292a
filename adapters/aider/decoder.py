"""
Aider conventions decoder.

Aider loads `CONVENTIONS.md` (via `--read` or `.aider.conf.yml`) as plain
markdown. Packages decode as rules, and a handful of well-known technology
names found in the text are added as tags.
"""

import re
from typing import Any, Dict, List, Optional, Tuple, Union

from core.canonical_models import AiderConfig, CanonicalPackage, Dialect, Subtype
from adapters.shared.markdown_dialect import PlainMarkdownDecoder

TAG_KEYWORDS = (
    'typescript', 'javascript', 'python', 'react', 'testing',
    'api', 'backend', 'frontend', 'database', 'security',
)
MAX_INFERRED_TAGS = 5


def infer_tags(text: str) -> List[str]:
    tags = []
    for keyword in TAG_KEYWORDS:
        if re.search(rf'\b{keyword}\b', text, re.IGNORECASE):
            tags.append(keyword)
    return tags[:MAX_INFERRED_TAGS]


class AiderDecoder(PlainMarkdownDecoder):
    default_subtype = Subtype.RULE
    config_class = AiderConfig

    @property
    def dialect(self) -> Dialect:
        return Dialect.AIDER

    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        pkg, warnings = super().decode(raw, hints)
        if isinstance(raw, str) and not pkg.tags:
            pkg.tags = ['aider'] + infer_tags(raw)
        return pkg, warnings
