"""
Kiro steering decoder.

Steering frontmatter declares how a file is pulled into context:

    ---
    inclusion: fileMatch
    fileMatchPattern: "components/**/*.tsx"
    ---

The foundational files `product.md`, `tech.md` and `structure.md` are
recognised from the file name hint; any other file name is the domain.
"""

from typing import Any, Dict

from core.canonical_models import Dialect, KiroConfig, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_globs, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

INCLUSION_MODES = ('always', 'fileMatch', 'manual')
FOUNDATIONAL_TYPES = ('product', 'tech', 'structure')
KNOWN_FIELDS = ('inclusion', 'fileMatchPattern', 'description')


class KiroDecoder(MarkdownDecoder):
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.KIRO

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        builder.metadata.description = text_field(data, 'description')

        inclusion = data.get('inclusion')
        if inclusion is None:
            builder.warn("Steering file declares no inclusion mode")
        elif inclusion not in INCLUSION_MODES:
            builder.warn(f"Ignoring unknown inclusion mode '{inclusion}'")
            inclusion = None

        pattern = text_field(data, 'fileMatchPattern') or None
        builder.metadata.globs = parse_globs(pattern)

        filename = str(builder.hints.get('filename') or '')
        stem = filename[:-3] if filename.endswith('.md') else filename
        foundational_type = stem if stem in FOUNDATIONAL_TYPES else None
        domain = builder.hints.get('domain') or (None if foundational_type else stem or None)

        builder.set_config(KiroConfig(
            inclusion=inclusion,
            file_match_pattern=pattern,
            domain=domain,
            filename=filename or None,
            foundational_type=foundational_type,
            extra=split_known(data, KNOWN_FIELDS),
        ))
