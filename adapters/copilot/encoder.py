"""
Copilot instructions encoder.

`applyTo` scopes the instructions to matching paths and has no default.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType
from core.errors import MissingRequiredOption
from adapters.shared.fields import pick_option, slugify
from adapters.shared.markdown_dialect import MarkdownEncoder, description_of, package_slug
from .decoder import INSTRUCTIONS_SUFFIX

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
    metadata_fields=frozenset({'globs'}),
)


class CopilotEncoder(MarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.COPILOT

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.COPILOT)
        apply_to = pick_option(options, 'apply_to', 'applyTo')
        if apply_to is None and config is not None:
            apply_to = config.apply_to
        if isinstance(apply_to, list):
            apply_to = ', '.join(str(glob) for glob in apply_to)
        if not apply_to or not str(apply_to).strip():
            raise MissingRequiredOption(
                'copilot', 'apply_to', 'a path glob is required; no default is applied'
            )

        frontmatter: Dict[str, Any] = {}
        description = description_of(pkg)
        if description:
            frontmatter['description'] = description
        frontmatter['applyTo'] = str(apply_to).strip()
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        config = pkg.config_for(Dialect.COPILOT)
        name = slugify(pick_option(options, 'instruction_name'))
        if not name and config is not None and config.instruction_name:
            name = config.instruction_name
        return f"{name or package_slug(pkg, options)}{INSTRUCTIONS_SUFFIX}"
