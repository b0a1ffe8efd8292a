"""
Kiro steering encoder.

`inclusion` is required and must be always, fileMatch or manual. A fileMatch
file also requires `file_match_pattern`. Neither is inferred from another
dialect's configuration.
"""

from typing import Any, Dict, List, Optional

from core.adapter_interface import DialectCapabilities
from core.canonical_models import CanonicalPackage, Dialect, KiroConfig, SectionType
from core.errors import MissingRequiredOption
from adapters.shared.fields import pick_option, slugify
from adapters.shared.markdown_dialect import MarkdownEncoder, description_of, package_slug
from .decoder import INCLUSION_MODES

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
    metadata_fields=frozenset({'globs'}),
)


def _from_config(config: Optional[KiroConfig], attribute: str) -> Any:
    return getattr(config, attribute) if config is not None else None


class KiroEncoder(MarkdownEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.KIRO

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(Dialect.KIRO)
        accepted = ', '.join(INCLUSION_MODES)

        inclusion = pick_option(options, 'inclusion') or _from_config(config, 'inclusion')
        if not inclusion:
            raise MissingRequiredOption('kiro', 'inclusion', f"one of {accepted}")
        if inclusion not in INCLUSION_MODES:
            raise MissingRequiredOption('kiro', 'inclusion',
                                        f"'{inclusion}' is not one of {accepted}")

        frontmatter: Dict[str, Any] = {'inclusion': inclusion}
        if inclusion == 'fileMatch':
            pattern = (pick_option(options, 'file_match_pattern', 'fileMatchPattern')
                       or _from_config(config, 'file_match_pattern'))
            if not pattern:
                raise MissingRequiredOption('kiro', 'file_match_pattern',
                                            'required when inclusion is fileMatch')
            frontmatter['fileMatchPattern'] = pattern

        description = description_of(pkg)
        if description:
            frontmatter['description'] = description
        if config is not None:
            for key, value in config.extra.items():
                frontmatter.setdefault(key, value)
        return frontmatter

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        config = pkg.config_for(Dialect.KIRO)
        explicit = pick_option(options, 'filename')
        if explicit:
            return str(explicit)
        foundational = pick_option(options, 'foundational_type') or _from_config(config, 'foundational_type')
        if foundational:
            return f"{foundational}.md"
        domain = slugify(pick_option(options, 'domain') or _from_config(config, 'domain'))
        return f"{domain or package_slug(pkg, options)}.md"
