"""
Copilot instructions decoder.

`applyTo` holds one glob or several comma-separated globs. It is kept as
written in CopilotConfig and split into the canonical globs hint.
"""

from typing import Any, Dict

from core.canonical_models import CopilotConfig, Dialect, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import parse_globs, split_known
from adapters.shared.markdown_dialect import MarkdownDecoder, text_field

KNOWN_FIELDS = ('applyTo', 'description')
INSTRUCTIONS_SUFFIX = '.instructions.md'


class CopilotDecoder(MarkdownDecoder):
    default_subtype = Subtype.RULE

    @property
    def dialect(self) -> Dialect:
        return Dialect.COPILOT

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        builder.metadata.description = text_field(data, 'description')

        apply_to = data.get('applyTo')
        if isinstance(apply_to, list):
            apply_to = ', '.join(str(glob) for glob in apply_to)
        apply_to = str(apply_to).strip() if apply_to else None
        builder.metadata.globs = parse_globs(apply_to)

        instruction_name = None
        filename = str(builder.hints.get('filename') or '')
        if filename.endswith(INSTRUCTIONS_SUFFIX):
            instruction_name = filename[:-len(INSTRUCTIONS_SUFFIX)]

        builder.set_config(CopilotConfig(
            apply_to=apply_to,
            instruction_name=instruction_name,
            extra=split_known(data, KNOWN_FIELDS),
        ))
