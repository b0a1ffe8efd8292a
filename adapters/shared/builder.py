"""
Per-call accumulator used by decoders to assemble a CanonicalPackage.
"""

from typing import Any, Dict, List, Optional

from core.canonical_models import (
    CanonicalPackage, CustomSection, Dialect, MetadataSection, Section, Subtype
)
from core.errors import gap_message

from .fields import slugify


class PackageBuilder:
    """
    Collects sections, warnings and envelope fields while a decoder runs.

    One builder is created per decode call, so decoders themselves stay
    stateless.
    """

    def __init__(self, dialect: Dialect, hints: Optional[Dict[str, Any]] = None):
        self.dialect = dialect
        self.hints: Dict[str, Any] = dict(hints or {})
        self.metadata = MetadataSection()
        self.sections: List[Section] = []
        self.warnings: List[str] = []
        self.configs: Dict[Dialect, Any] = {}
        self.subtype: Optional[Subtype] = None
        self.name: Optional[str] = None

    def add(self, section: Section) -> None:
        self.sections.append(section)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def preserve(self, fragment: str, title: Optional[str] = None,
                 metadata: Optional[Dict[str, Any]] = None,
                 executable: bool = False, report: bool = True) -> Optional[CustomSection]:
        """
        Keep a fragment verbatim as a custom section owned by this dialect.

        Args:
            fragment: Raw text to keep
            title: Optional label for the section
            metadata: Extra data needed to restore the fragment
            executable: Mark the fragment as an executable tool definition
            report: Emit the standard gap warning

        Returns:
            The new section, or None for blank fragments
        """
        if not fragment or not fragment.strip():
            return None
        section = CustomSection(
            content=fragment.strip('\n'),
            dialect=self.dialect.value,
            title=title,
            metadata=dict(metadata or {}),
            executable=executable,
        )
        self.sections.append(section)
        if report:
            self.warn(gap_message(len(section.content)))
        return section

    def set_config(self, config: Any) -> None:
        self.configs[config.dialect] = config

    def build(self, default_subtype: Subtype = Subtype.RULE) -> CanonicalPackage:
        """Assemble the package. The metadata section is always first."""
        hints = self.hints
        name = hints.get('name') or self.name or self.metadata.title or _name_from_filename(hints)
        if not name:
            # No title to carry; only the envelope gets a placeholder name
            name = 'untitled'
        elif not self.metadata.title:
            self.metadata.title = name
        if hints.get('version') and not self.metadata.version:
            self.metadata.version = str(hints['version'])
        if hints.get('author') and not self.metadata.author:
            self.metadata.author = str(hints['author'])

        subtype = self.subtype or default_subtype
        if hints.get('subtype'):
            try:
                subtype = Subtype(hints['subtype'])
            except ValueError:
                self.warn(f"Ignoring unknown subtype hint '{hints['subtype']}'")

        return CanonicalPackage(
            id=hints.get('id') or slugify(name) or 'package',
            name=name,
            version=self.metadata.version or '1.0.0',
            description=self.metadata.description,
            author=self.metadata.author,
            tags=list(hints.get('tags') or []),
            format=self.dialect,
            subtype=subtype,
            sections=[self.metadata] + self.sections,
            dialect_configs=dict(self.configs),
            source_format=self.dialect,
            source_url=hints.get('source_url'),
            official=bool(hints.get('official', False)),
            verified=bool(hints.get('verified', False)),
        )


def _name_from_filename(hints: Dict[str, Any]) -> Optional[str]:
    filename = hints.get('filename')
    if not filename:
        return None
    stem = str(filename).split('/')[-1]
    for suffix in ('.instructions.md', '.agent.json', '.json', '.toml', '.mdc', '.md'):
        if stem.endswith(suffix):
            return stem[:-len(suffix)]
    return stem
