"""
Structural validation of canonical packages.

Validation reports problems; it never raises. Callers decide whether to
proceed, and the orchestrator turns every finding into a warning.
"""

from dataclasses import dataclass
from typing import List

from .canonical_models import (
    CanonicalPackage, CustomSection, Dialect, ExamplesSection, RulesSection
)


@dataclass(frozen=True)
class ValidationError:
    """A single finding. `path` points into the package, e.g. 'sections[2]'."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def validate(pkg: CanonicalPackage) -> List[ValidationError]:
    """
    Check a package for structural problems.

    Args:
        pkg: Package to check

    Returns:
        List of findings, empty when the package is well formed
    """
    errors: List[ValidationError] = []

    if not pkg.sections:
        errors.append(ValidationError('sections', 'package has no sections'))
        return errors

    if pkg.metadata_section() is None:
        errors.append(ValidationError('sections', 'package has no metadata section'))

    declared = set(Dialect.names())
    for index, section in enumerate(pkg.sections):
        path = f"sections[{index}]"
        if isinstance(section, RulesSection) and not section.items:
            errors.append(ValidationError(path, f"rules section '{section.title}' has no items"))
        elif isinstance(section, ExamplesSection):
            for position, example in enumerate(section.examples):
                if not example.code or not example.code.strip():
                    errors.append(ValidationError(
                        f"{path}.examples[{position}]", 'example has no code'
                    ))
        elif isinstance(section, CustomSection):
            if not section.dialect:
                errors.append(ValidationError(path, 'custom section declares no dialect'))
            elif section.dialect not in declared:
                errors.append(ValidationError(
                    path, f"custom section has unknown dialect '{section.dialect}'"
                ))

    return errors


def is_valid(pkg: CanonicalPackage) -> bool:
    return not validate(pkg)
