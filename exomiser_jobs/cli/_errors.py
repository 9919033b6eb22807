"""Exceptions raised while resolving command-line options into jobs."""

from __future__ import annotations


class JobResolutionError(ValueError):
    """Base class for failures that abort a resolution unit."""


class InvalidOptionCombination(JobResolutionError):
    """Raised when the supplied options match no resolution path."""


class UnparseableDescriptor(JobResolutionError):
    """Raised when a file decodes to the empty value of its expected shape."""


class UnrecognizedPreset(JobResolutionError):
    """Raised when a preset value is neither exome nor genome."""


class IncompleteLegacySample(JobResolutionError):
    """Raised when a legacy analysis does not carry a usable sample."""


class ConfigFormatError(JobResolutionError):
    """Raised when a file cannot be read as a JSON or YAML document."""


__all__ = [
    "ConfigFormatError",
    "IncompleteLegacySample",
    "InvalidOptionCombination",
    "JobResolutionError",
    "UnparseableDescriptor",
    "UnrecognizedPreset",
]
