"""
Conversion orchestrator.

Drives one conversion through a small state machine:

    DECODING -> TRANSFORMING -> ENCODING -> DONE
        \\            \\             \\
         +------------+-------------+--> FAILED

Responsibilities:
- Resolve source and target dialects through the registry before any work
  starts (UnsupportedDialectPair otherwise)
- Decode, then transform: guarantee a metadata section, report validation
  findings, and strip every executable tool definition regardless of dialect
- Encode, then run the loss assessor on the source package and the result
- Merge warnings in generation order: decoder, transform, encoder, assessor

Only MissingRequiredOption and UnsupportedDialectPair (both ConversionError)
leave this module. Decoder failures degrade to a warning; unexpected encoder
failures are re-raised as ConversionError so no partial result escapes.

The orchestrator holds no per-conversion state. Each call creates its own
ConversionRun, so one orchestrator serves parallel conversions and batch
reconversion runs packages concurrently on a thread pool.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from .adapter_interface import DialectAdapter
from .canonical_models import (
    CanonicalPackage, ConversionResult, CustomSection, Dialect, MetadataSection
)
from .errors import ConversionError, MissingRequiredOption, UnsupportedDialectPair
from .loss_assessor import assess_conversion
from .registry import FormatRegistry
from .validation import validate

logger = logging.getLogger(__name__)

FormatName = Union[str, Dialect]


class ConversionState(str, Enum):
    DECODING = "decoding"
    TRANSFORMING = "transforming"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ConversionRun:
    """State of one conversion call."""
    source: Dialect
    target: Dialect
    state: ConversionState = ConversionState.DECODING
    history: List[ConversionState] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.history.append(self.state)

    def advance(self, state: ConversionState) -> None:
        logger.debug("%s -> %s: %s", self.source.value, self.target.value, state.value)
        self.state = state
        self.history.append(state)


@dataclass
class BatchOutcome:
    """Result of re-encoding one stored package."""
    package_id: str
    result: Optional[ConversionResult] = None
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class ConversionOrchestrator:
    """
    Orchestrates decode -> transform -> encode -> assess.

    Args:
        registry: Registry providing the dialect adapters
    """

    def __init__(self, registry: FormatRegistry):
        self.registry = registry

    def convert(self, raw: Union[str, Dict[str, Any]], source_format: FormatName,
                target_format: FormatName, options: Optional[Dict[str, Any]] = None,
                hints: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """
        Convert a raw artifact from one dialect to another.

        Args:
            raw: Source artifact text (or parsed JSON)
            source_format: Declared source dialect
            target_format: Requested target dialect
            options: Target dialect options (always_apply, apply_to,
                inclusion, ...)
            hints: Envelope hints for the decoder (id, name, subtype, ...)

        Returns:
            ConversionResult with content, warnings, lossy flag and score

        Raises:
            UnsupportedDialectPair: If either format has no adapter
            MissingRequiredOption: If the target needs an option that
                was not given
        """
        source_adapter, target_adapter = self._resolve(source_format, target_format)
        run = ConversionRun(source_adapter.dialect, target_adapter.dialect)
        pkg = self._decode(run, source_adapter, raw, hints)
        return self._finish(run, pkg, target_adapter, options)

    def encode_package(self, pkg: CanonicalPackage, target_format: FormatName,
                       options: Optional[Dict[str, Any]] = None) -> ConversionResult:
        """
        Encode an already-decoded (e.g. stored) canonical package.

        The package's source_format is used as the source dialect for loss
        assessment; packages without one are treated as generic.
        """
        source_dialect = pkg.source_format or pkg.format or Dialect.GENERIC
        source_adapter, target_adapter = self._resolve(source_dialect, target_format,
                                                       require_source=False)
        run = ConversionRun(source_dialect, target_adapter.dialect)
        return self._finish(run, pkg, target_adapter, options)

    def reconvert_batch(self, packages: Iterable[CanonicalPackage], target_format: FormatName,
                        options: Optional[Dict[str, Any]] = None,
                        max_workers: Optional[int] = None) -> List[BatchOutcome]:
        """
        Re-encode many stored packages into one target dialect in parallel.

        A failure only affects its own package.

        Returns:
            One BatchOutcome per package, in input order
        """
        packages = list(packages)
        self._resolve(Dialect.GENERIC, target_format, require_source=False)

        def reconvert(pkg: CanonicalPackage) -> BatchOutcome:
            try:
                return BatchOutcome(pkg.id, result=self.encode_package(pkg, target_format, options))
            except ConversionError as e:
                logger.info("Reconversion of %s failed: %s", pkg.id, e)
                return BatchOutcome(pkg.id, error=e)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(reconvert, packages))

    def _resolve(self, source_format: FormatName, target_format: FormatName,
                 require_source: bool = True) -> Tuple[Optional[DialectAdapter], DialectAdapter]:
        source_name = getattr(source_format, 'value', source_format)
        target_name = getattr(target_format, 'value', target_format)

        source_adapter = self.registry.get_adapter(source_format)
        if require_source and source_adapter is None:
            raise UnsupportedDialectPair(source_name, target_name,
                                         f"no decoder registered for '{source_name}'")
        target_adapter = self.registry.get_adapter(target_format)
        if target_adapter is None:
            raise UnsupportedDialectPair(source_name, target_name,
                                         f"no encoder registered for '{target_name}'")
        return source_adapter, target_adapter

    def _decode(self, run: ConversionRun, adapter: DialectAdapter,
                raw: Union[str, Dict[str, Any]],
                hints: Optional[Dict[str, Any]]) -> CanonicalPackage:
        try:
            pkg, warnings = adapter.decode(raw, hints)
        except Exception as e:
            # Decoders are meant to be total; keep the input rather than fail.
            logger.exception("%s decoder raised", adapter.format_name)
            text = raw if isinstance(raw, str) else repr(raw)
            pkg = CanonicalPackage(
                id=str((hints or {}).get('id') or 'package'),
                name=str((hints or {}).get('name') or 'untitled'),
                format=adapter.dialect,
                source_format=adapter.dialect,
                sections=[
                    MetadataSection(title=str((hints or {}).get('name') or 'untitled')),
                    CustomSection(content=text, dialect=adapter.dialect.value, title='source'),
                ],
            )
            warnings = [f"{adapter.format_name} decoder failed ({e}); source preserved verbatim"]
        run.warnings.extend(warnings)
        return pkg

    def _transform(self, run: ConversionRun, pkg: CanonicalPackage) -> CanonicalPackage:
        sections = list(pkg.sections)

        if pkg.metadata_section() is None:
            sections.insert(0, MetadataSection(title=pkg.name, description=pkg.description,
                                               version=pkg.version, author=pkg.author))
            run.warnings.append("Package had no metadata section; one was created from the package envelope")

        for finding in validate(pkg.with_sections(sections)):
            run.warnings.append(f"Validation: {finding}")

        # Executable definitions never reach an encoder. The assessor reports
        # each one against the source package.
        kept = [section for section in sections
                if not (isinstance(section, CustomSection) and section.executable)]
        return pkg.with_sections(kept)

    def _finish(self, run: ConversionRun, source_pkg: CanonicalPackage,
                target_adapter: DialectAdapter,
                options: Optional[Dict[str, Any]]) -> ConversionResult:
        try:
            run.advance(ConversionState.TRANSFORMING)
            pkg = self._transform(run, source_pkg)

            run.advance(ConversionState.ENCODING)
            try:
                encoded = target_adapter.encode(pkg, options)
            except ConversionError:
                raise
            except Exception as e:
                logger.exception("%s encoder raised", target_adapter.format_name)
                raise ConversionError(f"{target_adapter.format_name} encoder failed: {e}") from e
            run.warnings.extend(encoded.warnings)

            assessment = assess_conversion(source_pkg, encoded, run.source, run.target,
                                           target_adapter.encoder.capabilities)
            run.warnings.extend(assessment.warnings)
        except ConversionError as e:
            run.advance(ConversionState.FAILED)
            if isinstance(e, MissingRequiredOption):
                logger.info("Conversion to %s aborted: %s", run.target.value, e)
            raise

        run.advance(ConversionState.DONE)
        return ConversionResult(
            content=encoded.content,
            format=run.target,
            warnings=list(run.warnings),
            lossy_conversion=assessment.lossy,
            quality_score=assessment.quality_score,
            filename=encoded.filename,
        )


_default_orchestrator: Optional[ConversionOrchestrator] = None


def get_default_orchestrator() -> ConversionOrchestrator:
    """Orchestrator over the built-in adapters, created on first use."""
    global _default_orchestrator
    if _default_orchestrator is None:
        from adapters import create_default_registry
        _default_orchestrator = ConversionOrchestrator(create_default_registry())
    return _default_orchestrator


def convert(raw: Union[str, Dict[str, Any]], source_format: FormatName,
            target_format: FormatName, options: Optional[Dict[str, Any]] = None,
            hints: Optional[Dict[str, Any]] = None) -> ConversionResult:
    """Convert with the built-in adapters. See ConversionOrchestrator.convert."""
    return get_default_orchestrator().convert(raw, source_format, target_format, options, hints)
