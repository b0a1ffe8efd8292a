"""
Kiro agent encoder.

Everything but tools and the model hint is rendered into the free-text
`prompt`. Rules have no structured slot there and are collapsed into prose.
Executable custom sections are never written back.
"""

import json
from typing import Any, Dict, Optional

from core.adapter_interface import DialectCapabilities, DialectEncoder
from core.canonical_models import CanonicalPackage, ConversionResult, Dialect, SectionType
from adapters.shared.markdown_dialect import description_of, metadata_of, package_slug, tools_of
from adapters.shared.markdown_renderer import render_body

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.EXAMPLES,
        SectionType.TOOLS, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
    approximated=frozenset({SectionType.RULES}),
    metadata_fields=frozenset({'model'}),
)


class KiroAgentEncoder(DialectEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.KIRO_AGENT

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def encode(self, pkg: CanonicalPackage,
               options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        options = dict(options or {})
        slug = package_slug(pkg, options)

        document: Dict[str, Any] = {
            'name': slug,
            'description': description_of(pkg),
            'prompt': render_body(pkg, Dialect.KIRO_AGENT, include_title=False,
                                  collapse_rules=True),
        }
        tools = tools_of(pkg)
        if tools:
            document['tools'] = tools
        model = options.get('model') or metadata_of(pkg).model
        if model:
            document['model'] = model

        config = pkg.config_for(Dialect.KIRO_AGENT)
        if config is not None:
            for key, value in config.extra.items():
                document.setdefault(key, value)

        return ConversionResult(
            content=json.dumps(document, indent=2, ensure_ascii=False) + '\n',
            format=Dialect.KIRO_AGENT,
            filename=f"{slug}.json",
        )
