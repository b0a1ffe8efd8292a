"""
Gemini CLI command encoder.

Everything but the description is rendered into the multi-line `prompt`
string. Gemini commands cannot grant tools.
"""

from typing import Any, Dict, Optional

import tomlkit

from core.adapter_interface import DialectCapabilities, DialectEncoder
from core.canonical_models import CanonicalPackage, ConversionResult, Dialect, SectionType
from adapters.shared.markdown_dialect import description_of, package_slug
from adapters.shared.markdown_renderer import render_body

CAPABILITIES = DialectCapabilities(
    native=frozenset({
        SectionType.METADATA, SectionType.INSTRUCTIONS, SectionType.RULES,
        SectionType.EXAMPLES, SectionType.PERSONA, SectionType.CONTEXT,
        SectionType.CUSTOM,
    }),
)


class GeminiEncoder(DialectEncoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.GEMINI

    @property
    def capabilities(self) -> DialectCapabilities:
        return CAPABILITIES

    def encode(self, pkg: CanonicalPackage,
               options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        options = dict(options or {})
        document = tomlkit.document()

        description = description_of(pkg)
        if description:
            document['description'] = description
        prompt = render_body(pkg, Dialect.GEMINI, include_title=False)
        document['prompt'] = tomlkit.string('\n' + prompt + '\n', multiline=True)

        config = pkg.config_for(Dialect.GEMINI)
        if config is not None:
            for key, value in config.extra.items():
                if key not in document:
                    document[key] = value

        return ConversionResult(
            content=tomlkit.dumps(document),
            format=Dialect.GEMINI,
            filename=f"{package_slug(pkg, options)}.toml",
        )
