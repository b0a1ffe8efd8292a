"""
Base decoder and encoder for dialects stored as markdown with optional YAML
frontmatter. Dialect subclasses only map their frontmatter fields; body
parsing and rendering are shared.
"""

import json
from typing import Any, Dict, List, Optional, Tuple, Union

from core.adapter_interface import DialectDecoder, DialectEncoder
from core.canonical_models import (
    CanonicalPackage, ConversionResult, MetadataSection, Subtype, ToolsSection
)
from core.errors import RecoverableParseGap

from .builder import PackageBuilder
from .fields import slugify, split_known
from .frontmatter import dump_frontmatter, split_frontmatter
from .markdown_parser import parse_body
from .markdown_renderer import render_body


class MarkdownDecoder(DialectDecoder):
    """
    Decoder template: frontmatter -> `read_frontmatter`, body -> shared parser.
    """

    detect_rules = True
    lead_description = False
    default_subtype = Subtype.RULE

    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        builder = PackageBuilder(self.dialect, hints)

        if raw is not None and not isinstance(raw, (str, dict)):
            builder.preserve(json.dumps(raw, indent=2, default=str), title='content')
            return builder.build(self.default_subtype), builder.warnings

        if isinstance(raw, dict):
            frontmatter = {k: v for k, v in raw.items() if k not in ('content', 'body')}
            body = str(raw.get('content') or raw.get('body') or '')
        else:
            try:
                frontmatter, body = split_frontmatter(raw or '')
            except RecoverableParseGap as gap:
                builder.preserve(gap.fragment, title='frontmatter')
                frontmatter, body = {}, gap.remainder

        self.read_frontmatter(frontmatter, builder)
        body = self.read_preamble(body, builder)
        parse_body(body, builder, detect_rules=self.detect_rules,
                   lead_description=self.lead_description)
        return builder.build(self.default_subtype), builder.warnings

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        """Map frontmatter keys onto the builder. Subclasses override."""
        pass

    def read_preamble(self, body: str, builder: PackageBuilder) -> str:
        """Consume dialect markers at the top of the body; returns the rest."""
        return body


def text_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ''
    return str(value).strip()


def metadata_of(pkg: CanonicalPackage) -> MetadataSection:
    return pkg.metadata_section() or MetadataSection(title=pkg.name, description=pkg.description)


def description_of(pkg: CanonicalPackage) -> str:
    return pkg.description or metadata_of(pkg).description or ''


def tools_of(pkg: CanonicalPackage) -> List[str]:
    """All tools granted by the package, in order, without duplicates."""
    tools: List[str] = []
    for section in pkg.sections:
        if isinstance(section, ToolsSection):
            for tool in section.tools:
                if tool not in tools:
                    tools.append(tool)
    return tools


def package_slug(pkg: CanonicalPackage, options: Optional[Dict[str, Any]] = None) -> str:
    options = options or {}
    return (slugify(options.get('name')) or slugify(pkg.name) or slugify(pkg.id)
            or 'package')


class MarkdownEncoder(DialectEncoder):
    """
    Encoder template: `build_frontmatter` + shared body renderer.
    """

    include_title = True
    include_description = False
    collapse_rules = False

    def encode(self, pkg: CanonicalPackage,
               options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        options = dict(options or {})
        warnings: List[str] = []
        frontmatter = self.build_frontmatter(pkg, options, warnings)
        body = self.render(pkg, options)
        return ConversionResult(
            content=dump_frontmatter(frontmatter, body),
            format=self.dialect,
            warnings=warnings,
            filename=self.filename(pkg, options),
        )

    def render(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return render_body(pkg, self.dialect,
                           include_title=self.include_title,
                           include_description=self.include_description,
                           collapse_rules=self.collapse_rules)

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        return {}

    def filename(self, pkg: CanonicalPackage, options: Dict[str, Any]) -> str:
        return f"{package_slug(pkg, options)}.md"


class PlainMarkdownDecoder(MarkdownDecoder):
    """
    Decoder for dialects that are plain markdown with no frontmatter of their
    own. A frontmatter block, if present anyway, still supplies the name and
    description; every other key is kept in `config_class(extra=...)`.
    """

    lead_description = True
    config_class: Any = None
    name_fields = ('name', 'title')

    def read_frontmatter(self, data: Dict[str, Any], builder: PackageBuilder) -> None:
        for key in self.name_fields:
            name = text_field(data, key)
            if name:
                builder.name = name
                break
        builder.metadata.description = text_field(data, 'description')
        extra = split_known(data, self.name_fields + ('description',))
        builder.set_config(self.config_class(extra=extra))


class PlainMarkdownEncoder(MarkdownEncoder):
    """
    Title, description paragraph and sections. Frontmatter is written only
    for fields carried over from a source of the same dialect.
    """

    include_description = True

    def build_frontmatter(self, pkg: CanonicalPackage, options: Dict[str, Any],
                          warnings: List[str]) -> Dict[str, Any]:
        config = pkg.config_for(self.dialect)
        return dict(config.extra) if config is not None else {}
