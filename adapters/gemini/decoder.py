"""
Gemini CLI command decoder.

Commands are TOML documents:

    description = "Review the staged diff"
    prompt = '''
    Review the staged changes for bugs.
    ...
    '''

The prompt is parsed as markdown. Input that is not a TOML table with a
string prompt is preserved whole.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import tomlkit
from tomlkit.exceptions import TOMLKitError

from core.adapter_interface import DialectDecoder
from core.canonical_models import CanonicalPackage, Dialect, GeminiConfig, Subtype
from adapters.shared.builder import PackageBuilder
from adapters.shared.fields import split_known
from adapters.shared.markdown_parser import parse_body

logger = logging.getLogger(__name__)

KNOWN_FIELDS = ('name', 'description', 'prompt')


def load_command(raw: str) -> Dict[str, Any]:
    """Parse TOML into plain Python values; raises TOMLKitError."""
    return tomlkit.parse(raw).unwrap()


class GeminiDecoder(DialectDecoder):

    @property
    def dialect(self) -> Dialect:
        return Dialect.GEMINI

    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        builder = PackageBuilder(Dialect.GEMINI, hints)

        data: Any = raw
        if isinstance(raw, str):
            try:
                data = load_command(raw)
            except TOMLKitError as e:
                logger.debug("Command is not valid TOML: %s", e)
                builder.preserve(raw, title='command')
                return builder.build(Subtype.SLASH_COMMAND), builder.warnings

        if not isinstance(data, dict):
            builder.preserve(json.dumps(data, indent=2, default=str), title='command')
            return builder.build(Subtype.SLASH_COMMAND), builder.warnings

        name = data.get('name')
        if name:
            builder.name = str(name)
        builder.metadata.description = str(data.get('description') or '').strip()

        prompt = data.get('prompt')
        if isinstance(prompt, str):
            parse_body(prompt, builder)
        elif prompt is not None:
            builder.preserve(json.dumps(prompt, indent=2, default=str), title='prompt')

        builder.set_config(GeminiConfig(extra=split_known(data, KNOWN_FIELDS)))
        return builder.build(Subtype.SLASH_COMMAND), builder.warnings
