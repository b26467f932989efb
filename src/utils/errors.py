#!/usr/bin/env python3
"""
Error types raised by the midfielder ranking pipeline.

All pipeline errors derive from ValueError so callers that already guard
stage calls with ``except ValueError`` keep working.
"""


class PipelineError(ValueError):
    """Base class for fatal pipeline errors."""


class SchemaError(PipelineError):
    """A required column is missing or the table fails schema validation."""


class ParseError(PipelineError):
    """A value in a numeric column cannot be coerced to a number."""

    def __init__(self, column: str, bad_values=None):
        self.column = column
        self.bad_values = list(bad_values or [])
        sample = ", ".join(repr(v) for v in self.bad_values[:5])
        message = f"Column '{column}' contains non-numeric values"
        if sample:
            message += f": {sample}"
        super().__init__(message)


class ConfigError(PipelineError):
    """Analysis parameters are inconsistent (weights, thresholds, counts)."""
