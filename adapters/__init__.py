"""
Dialect adapters for converting between tool-specific formats and the
canonical representation.

Each dialect lives in its own sub-package with three modules:
- decoder.py: parse the dialect into a CanonicalPackage
- encoder.py: render a CanonicalPackage into the dialect
- adapter.py: coordinator pairing the two and recognising files on disk

Available adapters:
- ClaudeSkillAdapter: Claude skills (SKILL.md)
- CopilotAdapter: GitHub Copilot path-scoped instructions
- KiroAdapter: Kiro steering files
- KiroAgentAdapter: Kiro agent JSON definitions
- AgentsMdAdapter: AGENTS.md
- AiderAdapter: Aider CONVENTIONS.md
- WindsurfAdapter: Windsurf rules
- ContinueAdapter: Continue rules and prompts
- DroidAdapter: Factory droids and commands
- RulerAdapter: Ruler sources (.ruler/*.md)
- TraeAdapter: Trae project rules
- ZencoderAdapter: Zencoder rules
- GeminiAdapter: Gemini CLI TOML commands
- CursorAdapter: Cursor rules (.mdc)
- ClaudeAdapter: Claude Code agents and slash commands
- GenericAdapter: fallback for any markdown

Adding a new dialect:
1. Add a member to core.canonical_models.Dialect
2. Create a sub-package with decoder, encoder and adapter modules
3. Register the adapter in create_default_registry()
"""

from core.registry import FormatRegistry

from .agents_md import AgentsMdAdapter
from .aider import AiderAdapter
from .claude import ClaudeAdapter
from .claude_skill import ClaudeSkillAdapter
from .continue_dev import ContinueAdapter
from .copilot import CopilotAdapter
from .cursor import CursorAdapter
from .droid import DroidAdapter
from .gemini import GeminiAdapter
from .generic import GenericAdapter
from .kiro import KiroAdapter
from .kiro_agent import KiroAgentAdapter
from .ruler import RulerAdapter
from .trae import TraeAdapter
from .windsurf import WindsurfAdapter
from .zencoder import ZencoderAdapter

# Registration order is detection order: specific file names and
# directories first, the markdown fallback last. Content sniffing follows
# the same order.
DEFAULT_ADAPTERS = (
    ClaudeSkillAdapter,
    CopilotAdapter,
    KiroAdapter,
    KiroAgentAdapter,
    AgentsMdAdapter,
    AiderAdapter,
    WindsurfAdapter,
    ContinueAdapter,
    DroidAdapter,
    RulerAdapter,
    TraeAdapter,
    ZencoderAdapter,
    GeminiAdapter,
    CursorAdapter,
    ClaudeAdapter,
    GenericAdapter,
)


def create_default_registry() -> FormatRegistry:
    """
    Initialize format registry with all available adapters.

    Returns:
        FormatRegistry with every built-in dialect registered
    """
    registry = FormatRegistry()
    for adapter_class in DEFAULT_ADAPTERS:
        registry.register(adapter_class())
    return registry


__all__ = [
    'AgentsMdAdapter',
    'AiderAdapter',
    'ClaudeAdapter',
    'ClaudeSkillAdapter',
    'ContinueAdapter',
    'CopilotAdapter',
    'CursorAdapter',
    'DroidAdapter',
    'GeminiAdapter',
    'GenericAdapter',
    'KiroAdapter',
    'KiroAgentAdapter',
    'RulerAdapter',
    'TraeAdapter',
    'WindsurfAdapter',
    'ZencoderAdapter',
    'DEFAULT_ADAPTERS',
    'create_default_registry',
]
