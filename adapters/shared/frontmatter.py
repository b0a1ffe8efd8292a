"""
YAML frontmatter handling for markdown dialects.

Frontmatter is a `---` fenced YAML mapping at the top of a file. Parsing is
tolerant: when the YAML is broken or not a mapping, the raw block is handed
back as a RecoverableParseGap so the decoder can keep it verbatim.
"""

import logging
import re
from typing import Any, Dict, Tuple

import yaml

from core.errors import RecoverableParseGap

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r'^---[ \t]*\n(.*?)^---[ \t]*$\n?(.*)', re.DOTALL | re.MULTILINE)


def normalize_newlines(content: str) -> str:
    return content.replace('\r\n', '\n').replace('\r', '\n')


def split_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """
    Split a markdown document into frontmatter data and body.

    Args:
        content: Full document text

    Returns:
        Tuple of (frontmatter dict, body). Documents without frontmatter
        return an empty dict and the whole text.

    Raises:
        RecoverableParseGap: If a frontmatter block exists but is not a
            valid YAML mapping. `fragment` holds the raw block and
            `remainder` the body.
    """
    text = normalize_newlines(content)
    match = FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text

    raw_yaml, body = match.group(1), match.group(2)
    try:
        data = yaml.safe_load(raw_yaml) if raw_yaml.strip() else {}
    except yaml.YAMLError as e:
        logger.debug("Unparseable frontmatter: %s", e)
        raise RecoverableParseGap(f"---\n{raw_yaml}---", body)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RecoverableParseGap(f"---\n{raw_yaml}---", body)
    return data, body


def dump_frontmatter(frontmatter: Dict[str, Any], body: str) -> str:
    """
    Join frontmatter and body into a document.

    Keys keep insertion order. An empty mapping produces a body-only
    document.
    """
    body = body.strip('\n')
    if not frontmatter:
        return f"{body}\n"
    yaml_str = yaml.dump(frontmatter, default_flow_style=False, sort_keys=False,
                         allow_unicode=True)
    if not body:
        return f"---\n{yaml_str}---\n"
    return f"---\n{yaml_str}---\n\n{body}\n"


def peek_frontmatter(content: str) -> Dict[str, Any]:
    """Frontmatter mapping of a document, empty when absent or unparseable."""
    try:
        data, _ = split_frontmatter(content)
    except RecoverableParseGap:
        return {}
    return data
