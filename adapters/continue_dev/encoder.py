"""
Continue encoder. `alwaysApply` is written only when the caller or a
Continue source supplied it.
"""

from typing import Any, Dict, List

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, SectionType, Subtype
from adapters.shared.fields import parse_bool, parse_globs, pick_option
from adapters.shared.markdown_dialect import MarkdownEncoder, description_of, metadata_of

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
    metadata_fields=frozenset({'globs'}),
)

PROMPT_SUBTYPES = (Subtype.SLASH_COMMAND, Subtype.PROMPT)


class ContinueEncoder(MarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.CONTINUE

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.CONTINUE)
        frontmatter: Dict[str, Any] = {'name': pkg.name}
        description = description_of(pkg)
        if description:
            frontmatter['description'] = description

        globs = parse_globs(pick_option(options, 'globs'))
        if not globs and config is not None:
            globs = list(config.globs)
        if not globs:
            globs = list(metadata_of(pkg).globs)
        if globs:
            frontmatter['globs'] = globs

        always_apply = parse_bool(pick_option(options, 'always_apply', 'alwaysApply'))
        if always_apply is None and config is not None:
            always_apply = config.always_apply
        if always_apply is not None:
            frontmatter['alwaysApply'] = always_apply

        if pkg.subtype in PROMPT_SUBTYPES or (config is not None and config.invokable):
            frontmatter['invokable'] = True

        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter
