"""GitHub Copilot path-scoped instructions (`*.instructions.md` with `applyTo`)."""

from .adapter import CopilotAdapter
from .decoder import CopilotDecoder
from .encoder import CopilotEncoder

__all__ = ['CopilotAdapter', 'CopilotDecoder', 'CopilotEncoder']
