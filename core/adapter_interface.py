"""
Abstract interfaces every dialect implements.

A dialect plugs in through three objects:
- DialectDecoder: raw text/JSON -> (CanonicalPackage, warnings)
- DialectEncoder: CanonicalPackage + options -> ConversionResult
- DialectAdapter: coordinator that owns one decoder and one encoder and
  knows which files belong to the dialect

Decoders and encoders never depend on each other, so adding a dialect means
writing one decoder, one encoder and one adapter without touching existing
ones. All three are stateless; per-call state lives in local variables so a
single registered instance can serve any number of parallel conversions.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from .canonical_models import (
    CanonicalPackage, ConversionResult, Dialect, SectionType, Subtype
)


@dataclass(frozen=True)
class DialectCapabilities:
    """
    What a target dialect can represent.

    Attributes:
        native: Section types rendered without loss
        approximated: Section types rendered in a degraded form
            (e.g. rules collapsed into prose)
        metadata_fields: Metadata hints the dialect has a slot for
            ('model', 'globs')
    """
    native: FrozenSet[SectionType]
    approximated: FrozenSet[SectionType] = frozenset()
    metadata_fields: FrozenSet[str] = frozenset()

    @property
    def dropped(self) -> FrozenSet[SectionType]:
        return frozenset(SectionType) - self.native - self.approximated

    def represents(self, section_type: SectionType) -> bool:
        return section_type in self.native or section_type in self.approximated

    def collapses(self, section_type: SectionType) -> bool:
        return section_type in self.approximated


class DialectDecoder(ABC):
    """Parses one dialect into the canonical model."""

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        pass

    @abstractmethod
    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        """
        Decode a raw artifact.

        Must be total over malformed input: fragments that cannot be mapped
        become custom sections plus a warning instead of an exception.

        Args:
            raw: Artifact text (or an already-parsed JSON object)
            hints: Envelope hints from the caller (id, name, version,
                author, tags, subtype, source_url, filename)

        Returns:
            Tuple of (package, warnings)
        """
        pass


class DialectEncoder(ABC):
    """Renders the canonical model into one dialect."""

    @property
    @abstractmethod
    def dialect(self) -> Dialect:
        pass

    @property
    @abstractmethod
    def capabilities(self) -> DialectCapabilities:
        pass

    @abstractmethod
    def encode(self, pkg: CanonicalPackage,
               options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """
        Render a package.

        Sections the dialect cannot represent are skipped silently; loss
        accounting belongs to the assessor.

        Args:
            pkg: Package to render
            options: Flat dict of dialect options

        Returns:
            ConversionResult with content and suggested filename. Its score
            and lossy flag are filled in by the orchestrator.

        Raises:
            MissingRequiredOption: If a scoping option with no safe default
                is absent or invalid
        """
        pass


class DialectAdapter(ABC):
    """
    Coordinator for one dialect.

    Pairs the decoder and encoder and adds file-level helpers, mirroring how
    a tool's configuration lives on disk.
    """

    @property
    @abstractmethod
    def decoder(self) -> DialectDecoder:
        pass

    @property
    @abstractmethod
    def encoder(self) -> DialectEncoder:
        pass

    @property
    def dialect(self) -> Dialect:
        return self.decoder.dialect

    @property
    def format_name(self) -> str:
        return self.dialect.value

    @property
    @abstractmethod
    def file_extension(self) -> str:
        pass

    @property
    def supported_subtypes(self) -> List[Subtype]:
        return list(Subtype)

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """Check whether a path looks like a file of this dialect."""
        pass

    def sniff(self, content: str) -> bool:
        """
        Check whether file content carries this dialect's markers.

        Used when the path alone identifies no dialect. Dialects without
        distinctive markers keep the default and are never sniffed.
        """
        return False

    def decode(self, raw: Union[str, Dict[str, Any]],
               hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        return self.decoder.decode(raw, hints)

    def encode(self, pkg: CanonicalPackage,
               options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        return self.encoder.encode(pkg, options)

    def read(self, file_path: Path,
             hints: Optional[Dict[str, Any]] = None) -> Tuple[CanonicalPackage, List[str]]:
        """Read a file and decode it. The file name is passed as a hint."""
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
        merged = {'filename': file_path.name}
        merged.update(hints or {})
        return self.decode(content, merged)

    def write(self, pkg: CanonicalPackage, file_path: Path,
              options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """Encode a package and write it to a file."""
        result = self.encode(pkg, options)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(result.content)
        return result
