"""
Cursor rule encoder.

`alwaysApply` decides whether a rule is injected into every request. It has
no default: widening a scoped rule to every file silently is exactly the
failure this guards against, so the value must come from the caller or from
the package's own Cursor configuration.
"""

from typing import Any, Dict, List, Optional

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, CursorConfig, Dialect, SectionType
from core.errors import MissingRequiredOption
from adapters.shared.fields import parse_bool, parse_globs, pick_option
from adapters.shared.markdown_dialect import (
    MarkdownEncoder, description_of, metadata_of, package_slug
)

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
    metadata_fields=frozenset({'globs'}),
)


def resolve_always_apply(options: Dict[str, Any], config: Optional[CursorConfig]) -> bool:
    raw = pick_option(options, 'always_apply', 'alwaysApply')
    if raw is None and config is not None:
        raw = config.always_apply
    if raw is None:
        raise MissingRequiredOption(
            'cursor', 'always_apply', 'no default is applied; pass true or false explicitly'
        )
    value = parse_bool(raw)
    if value is None:
        raise MissingRequiredOption('cursor', 'always_apply', f"expected a boolean, got {raw!r}")
    return value


class CursorEncoder(MarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.CURSOR

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.CURSOR)
        always_apply = resolve_always_apply(options, config)

        globs = parse_globs(pick_option(options, 'globs'))
        if not globs and config is not None:
            globs = list(config.globs)
        if not globs:
            globs = list(metadata_of(pkg).globs)

        frontmatter: Dict[str, Any] = {'description': description_of(pkg)}
        if globs:
            frontmatter['globs'] = globs
        frontmatter['alwaysApply'] = always_apply
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return f"{package_slug(pkg, options)}.mdc"
