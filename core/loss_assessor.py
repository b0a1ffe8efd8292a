"""
Loss and quality assessment for a single conversion.

The assessor compares the source package with what the target dialect can
represent and scores the conversion from a 100 baseline:

    -25 per tools section the target drops
    -15 per custom section the target cannot restore
    -10 per rule item collapsed into free text
     -5 per lost metadata field (model/globs hint, or a native field of the
        source dialect that only its own encoder knows)

A conversion is lossy whenever any of those apply. Packages with no body
sections at all additionally lose 10 points as a content floor; that alone
does not make a conversion lossy.

`assess_conversion` is a pure function: it reads its inputs, never mutates
them, and returns the same assessment every time it is called with them.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .adapter_interface import DialectCapabilities
from .canonical_models import (
    CanonicalPackage, ConversionResult, CustomSection, Dialect, RulesSection,
    SectionType, ToolsSection
)

BASELINE_SCORE = 100
TOOLS_PENALTY = 25
CUSTOM_PENALTY = 15
COLLAPSED_RULE_PENALTY = 10
METADATA_FIELD_PENALTY = 5
CONTENT_FLOOR_PENALTY = 10

METADATA_HINTS = ('model', 'globs')


@dataclass(frozen=True)
class Penalty:
    """One deduction. `lossy` is False only for the content floor."""
    kind: str
    points: int
    warning: str
    lossy: bool = True


@dataclass(frozen=True)
class LossAssessment:
    quality_score: int
    lossy: bool
    warnings: Tuple[str, ...]
    penalties: Tuple[Penalty, ...]


def _custom_label(section: CustomSection) -> str:
    if section.title:
        return f"'{section.title}'"
    return f"({len(section.content)} characters)"


def _custom_penalty(section: CustomSection, target: Dialect) -> Penalty:
    owner = section.dialect or 'undeclared dialect'
    if section.executable:
        warning = (f"Dropped executable tool definition {_custom_label(section)} from {owner}; "
                   f"executable definitions are never carried across conversions")
    else:
        warning = (f"Dropped {owner} content {_custom_label(section)} with no "
                   f"equivalent in {target.value}")
    return Penalty('custom', CUSTOM_PENALTY, warning)


def assess_conversion(source: CanonicalPackage, result: ConversionResult,
                      source_dialect: Dialect, target_dialect: Dialect,
                      capabilities: DialectCapabilities) -> LossAssessment:
    """
    Score a conversion and list what it lost.

    Args:
        source: Package as decoded from the source artifact
        result: Encoder output for the target dialect
        source_dialect: Dialect the package came from
        target_dialect: Dialect it was rendered into
        capabilities: What the target encoder can represent

    Returns:
        LossAssessment with score in [0, 100], lossy flag and warnings in
        section order
    """
    if result.format != target_dialect:
        raise ValueError(f"Result is {result.format.value}, expected {target_dialect.value}")

    penalties: List[Penalty] = []

    for section in source.sections:
        if isinstance(section, ToolsSection):
            if not capabilities.represents(SectionType.TOOLS):
                names = ', '.join(section.tools) or 'none listed'
                penalties.append(Penalty(
                    'tools', TOOLS_PENALTY,
                    f"Dropped tools section ({names}): {target_dialect.value} has no tools concept",
                ))
        elif isinstance(section, CustomSection):
            restorable = (
                not section.executable
                and section.dialect == target_dialect.value
                and capabilities.represents(SectionType.CUSTOM)
            )
            if not restorable:
                penalties.append(_custom_penalty(section, target_dialect))
        elif isinstance(section, RulesSection):
            if capabilities.collapses(SectionType.RULES) and section.items:
                count = len(section.items)
                warning = (f"Collapsed {count} rule(s) from '{section.title or 'Rules'}' "
                           f"into free text for {target_dialect.value}")
                # One deduction per rule, one warning per section.
                penalties.extend(
                    Penalty('rules', COLLAPSED_RULE_PENALTY, warning if index == 0 else '')
                    for index in range(count)
                )

    metadata = source.metadata_section()
    if metadata is not None:
        for hint in METADATA_HINTS:
            if getattr(metadata, hint) and hint not in capabilities.metadata_fields:
                penalties.append(Penalty(
                    'metadata', METADATA_FIELD_PENALTY,
                    f"Lost {hint} hint: {target_dialect.value} has no equivalent field",
                ))

    if source_dialect != target_dialect:
        config = source.config_for(source_dialect)
        if config is not None:
            for key in config.extra:
                penalties.append(Penalty(
                    'metadata', METADATA_FIELD_PENALTY,
                    f"Lost {source_dialect.value} field '{key}': no equivalent in "
                    f"{target_dialect.value}",
                ))

    if not source.body_sections():
        penalties.append(Penalty(
            'content', CONTENT_FLOOR_PENALTY,
            "Package has no content sections; only metadata was converted",
            lossy=False,
        ))

    total = sum(penalty.points for penalty in penalties)
    score = max(0, min(BASELINE_SCORE, BASELINE_SCORE - total))
    return LossAssessment(
        quality_score=score,
        lossy=any(penalty.lossy for penalty in penalties),
        warnings=tuple(penalty.warning for penalty in penalties if penalty.warning),
        penalties=tuple(penalties),
    )
