"""
Field-level helpers shared by dialect decoders and encoders.
"""

import re
from typing import Any, Dict, List, Optional

# Long model names some dialects use, mapped to the canonical short names.
MODEL_ALIASES = {
    'claude sonnet 4': 'sonnet',
    'claude-sonnet-4': 'sonnet',
    'claude opus 4': 'opus',
    'claude-opus-4': 'opus',
    'claude haiku 4': 'haiku',
    'claude-haiku-4': 'haiku',
}

_TRUE_VALUES = ('true', 'yes', 'on', '1')
_FALSE_VALUES = ('false', 'no', 'off', '0')


def parse_tools(tools_value: Any) -> List[str]:
    """
    Parse tools from comma-separated string or list.

    Args:
        tools_value: Either string "tool1, tool2" or list ["tool1", "tool2"]

    Returns:
        List of tool names
    """
    if isinstance(tools_value, str):
        return [t.strip() for t in tools_value.split(',') if t.strip()]
    elif isinstance(tools_value, list):
        return [str(t).strip() for t in tools_value if str(t).strip()]
    return []


def parse_globs(value: Any) -> List[str]:
    """Globs arrive as a YAML list or a comma-separated string."""
    return parse_tools(value)


def normalize_model(model: Optional[str]) -> Optional[str]:
    """
    Normalize model name to canonical form.

    Short names (sonnet, opus, haiku, inherit) are the canonical form.
    Known long names are mapped back to them; anything else is lowercased.
    """
    if not model:
        return None
    key = str(model).strip().lower()
    return MODEL_ALIASES.get(key, key)


def parse_bool(value: Any) -> Optional[bool]:
    """
    Interpret a boolean option coming from YAML, JSON or the command line.

    Returns:
        True/False, or None when the value is missing or not a boolean
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    return None


def slugify(text: Optional[str], max_length: int = 64) -> str:
    """Lowercase, hyphen-separated identifier suitable for file names."""
    if not text:
        return ''
    slug = re.sub(r'[^a-z0-9]+', '-', str(text).lower()).strip('-')
    return slug[:max_length].rstrip('-')


def pick_option(options: Optional[Dict[str, Any]], *keys: str) -> Any:
    """Return the first option among `keys` that was explicitly given."""
    if not options:
        return None
    for key in keys:
        if key in options and options[key] is not None:
            return options[key]
    return None


def split_known(data: Dict[str, Any], known) -> Dict[str, Any]:
    """Return the entries of `data` whose keys are not in `known`."""
    return {k: v for k, v in data.items() if k not in known}
