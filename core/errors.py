"""
Error taxonomy for conversions.

Only MissingRequiredOption and UnsupportedDialectPair abort a conversion and
reach the caller. RecoverableParseGap is raised by low-level parsers and
caught by decoders, which preserve the fragment verbatim and continue.
EvaluationUnavailable never leaves the scoring package.
"""

from typing import Optional


def gap_message(size: int) -> str:
    """Warning text emitted whenever a decoder preserves an unmapped fragment."""
    return (f"{size} characters of content could not be mapped to a canonical "
            f"section and were preserved verbatim")


class ConversionError(ValueError):
    """Base class for failures that abort a conversion."""


class MissingRequiredOption(ConversionError):
    """
    An encoder needs a scoping option that has no safe default.

    Attributes:
        dialect: Target dialect name
        field: Name of the missing or invalid option
        reason: Optional extra detail (e.g. the accepted values)
    """

    def __init__(self, dialect: str, field: str, reason: Optional[str] = None):
        self.dialect = dialect
        self.field = field
        self.reason = reason
        message = f"{dialect} requires option '{field}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedDialectPair(ConversionError):
    """No decoder or encoder is registered for a requested format."""

    def __init__(self, source: str, target: str, reason: str):
        self.source = source
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot convert {source} -> {target}: {reason}")


class RecoverableParseGap(Exception):
    """
    A fragment of source content that no canonical section can hold.

    Attributes:
        fragment: The raw text that could not be parsed
        remainder: Text following the fragment that is still parseable
    """

    def __init__(self, fragment: str, remainder: str = ""):
        self.fragment = fragment
        self.remainder = remainder
        super().__init__(gap_message(len(fragment)))


class EvaluationUnavailable(Exception):
    """The content evaluator could not produce a score."""
