"""
Error taxonomy for the hit prediction pipeline.

Every failure the pipeline reports derives from HitPredictionError so the
entry point can abort with one descriptive message.
"""

from typing import Iterable, List


class HitPredictionError(Exception):
    """Base class for all pipeline errors."""


class InputSchemaError(HitPredictionError):
    """A source could not be read, or lacks a required column."""

    def __init__(self, source: str, missing: Iterable[str] = (), detail: str = ""):
        self.source = source
        self.missing = list(missing)
        if self.missing:
            message = f"{source} is missing required columns: {', '.join(self.missing)}"
        else:
            message = f"Could not read {source}: {detail}"
        super().__init__(message)


class MalformedRowError(HitPredictionError):
    """A required field could not be coerced to its expected type."""

    def __init__(self, column: str, row_indices: Iterable, reason: str = "could not be parsed"):
        self.column = column
        self.row_indices: List = list(row_indices)
        preview = ', '.join(str(i) for i in self.row_indices[:10])
        if len(self.row_indices) > 10:
            preview += ', ...'
        super().__init__(
            f"Column '{column}' {reason} for {len(self.row_indices)} row(s): [{preview}]"
        )


class DegenerateInputError(HitPredictionError):
    """An empty partition reached the evaluator."""


class ConfigurationError(HitPredictionError):
    """A sampling or model parameter is out of range."""
