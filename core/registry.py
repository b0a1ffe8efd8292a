"""
Format registry for dialect adapters.

Maps the closed Dialect enumeration to the adapter implementing it. Lookups
by name go through Dialect.parse, so dispatch never compares free-form
strings against dialect internals.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from .adapter_interface import DialectAdapter
from .canonical_models import Dialect, Subtype

logger = logging.getLogger(__name__)


class FormatRegistry:
    """
    Registry of available dialect adapters.

    Detection walks adapters in registration order, so more specific
    adapters (SKILL.md, *.instructions.md) must be registered before the
    generic markdown fallback.
    """

    def __init__(self):
        self._adapters: Dict[Dialect, DialectAdapter] = {}

    def register(self, adapter: DialectAdapter) -> None:
        """
        Register a dialect adapter.

        Args:
            adapter: Adapter instance to register

        Raises:
            ValueError: If the dialect is already registered
        """
        if adapter.dialect in self._adapters:
            raise ValueError(f"Format '{adapter.format_name}' already registered")
        self._adapters[adapter.dialect] = adapter
        logger.debug("Registered %s adapter", adapter.format_name)

    def unregister(self, format_name: Union[str, Dialect]) -> None:
        """Remove an adapter. Unknown names are ignored."""
        dialect = self._resolve(format_name)
        if dialect is not None:
            self._adapters.pop(dialect, None)

    def get_adapter(self, format_name: Union[str, Dialect]) -> Optional[DialectAdapter]:
        """
        Get adapter by format name.

        Args:
            format_name: Dialect or its name ('cursor', 'agents.md', ...)

        Returns:
            Adapter, or None if the name is unknown or unregistered
        """
        dialect = self._resolve(format_name)
        if dialect is None:
            return None
        return self._adapters.get(dialect)

    def detect_format(self, file_path: Path) -> Optional[DialectAdapter]:
        """
        Auto-detect the dialect of a file from its path.

        Returns:
            First adapter that can handle the file, or None
        """
        for adapter in self._adapters.values():
            if adapter.can_handle(file_path):
                return adapter
        return None

    def detect_content(self, content: str) -> Optional[DialectAdapter]:
        """
        Auto-detect the dialect of file content from its markers.

        Returns:
            First adapter, in registration order, whose markers match, or None
        """
        for adapter in self._adapters.values():
            if adapter.sniff(content):
                return adapter
        return None

    def list_formats(self) -> List[str]:
        return [dialect.value for dialect in self._adapters]

    def supports_subtype(self, format_name: Union[str, Dialect], subtype: Subtype) -> bool:
        adapter = self.get_adapter(format_name)
        return adapter is not None and subtype in adapter.supported_subtypes

    def get_formats_supporting(self, subtype: Subtype) -> List[str]:
        return [adapter.format_name for adapter in self._adapters.values()
                if subtype in adapter.supported_subtypes]

    @staticmethod
    def _resolve(format_name: Union[str, Dialect]) -> Optional[Dialect]:
        try:
            return Dialect.parse(format_name)
        except ValueError:
            return None
