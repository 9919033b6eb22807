"""Resolve command-line descriptor files into Exomiser jobs."""

from __future__ import annotations

from ._errors import (
    ConfigFormatError,
    IncompleteLegacySample,
    InvalidOptionCombination,
    JobResolutionError,
    UnparseableDescriptor,
    UnrecognizedPreset,
)
from ._job_builder import JobDraft, resolve_jobs
from ._schemas import Analysis, Family, Job, OutputFormat, OutputOptions, Phenopacket, Preset, Sample

__all__ = [
    "Analysis",
    "ConfigFormatError",
    "Family",
    "IncompleteLegacySample",
    "InvalidOptionCombination",
    "Job",
    "JobDraft",
    "JobResolutionError",
    "OutputFormat",
    "OutputOptions",
    "Phenopacket",
    "Preset",
    "Sample",
    "UnparseableDescriptor",
    "UnrecognizedPreset",
    "resolve_jobs",
]
