"""Resolve command-line options into executable job definitions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from ._config_loader import read_paths_from_batch_file
from ._constants import (
    ANALYSIS_BATCH_OPTION,
    ANALYSIS_OPTION,
    JOB_OPTION,
    NO_SAMPLE_MESSAGE,
    OUTPUT_OPTION,
    PRESET_OPTION,
    SAMPLE_OPTION,
)
from ._errors import IncompleteLegacySample, InvalidOptionCombination, UnparseableDescriptor
from ._legacy import clear_legacy_fields, is_legacy_analysis, migrate_legacy_job
from ._options import ResolutionPath, collect_option_names, select_resolution_path
from ._schemas import Analysis, Job, OutputOptions, Preset, SampleInput, parse_preset
from ._sniffer import read_analysis, read_job, read_output_options, read_sample_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JobDraft:
    """Partially assembled job; every merge returns a new draft."""

    sample_input: SampleInput | None = None
    analysis: Analysis | None = None
    preset: Preset = Preset.EXOME
    output_options: OutputOptions = field(default_factory=OutputOptions)

    def finalize(self) -> Job:
        if self.sample_input is None:
            raise InvalidOptionCombination(NO_SAMPLE_MESSAGE)
        return Job(
            sample_input=self.sample_input,
            analysis=self.analysis,
            preset=self.preset,
            output_options=self.output_options,
        )


def merge_sample_input(draft: JobDraft, sample_input: SampleInput) -> JobDraft:
    return replace(draft, sample_input=sample_input)


def merge_analysis(draft: JobDraft, analysis: Analysis) -> JobDraft:
    return replace(draft, analysis=analysis)


def merge_preset(draft: JobDraft, preset: Preset) -> JobDraft:
    return replace(draft, preset=preset)


def merge_output_options(draft: JobDraft, output_options: OutputOptions) -> JobDraft:
    return replace(draft, output_options=output_options)


# Option name -> handler applying the option's value to a draft, in merge order.
_SAMPLE_PATH_HANDLERS: dict[str, Callable[[JobDraft, str], JobDraft]] = {
    SAMPLE_OPTION: lambda draft, value: merge_sample_input(draft, read_sample_input(Path(value))),
    ANALYSIS_OPTION: lambda draft, value: merge_analysis(draft, _read_sample_path_analysis(Path(value))),
    PRESET_OPTION: lambda draft, value: merge_preset(draft, parse_preset(value)),
    OUTPUT_OPTION: lambda draft, value: merge_output_options(draft, read_output_options(Path(value))),
}


def resolve_jobs(option_values: Mapping[str, str | None]) -> list[Job]:
    """Turn the job-related command-line options of one invocation into jobs.

    ``option_values`` maps option names (without dashes) to their values;
    options mapped to ``None`` count as not supplied.
    """
    options = collect_option_names(option_values)
    path = select_resolution_path(options)

    if path is ResolutionPath.ANALYSIS:
        return [read_job_or_legacy_analysis(Path(option_values[ANALYSIS_OPTION]))]
    if path is ResolutionPath.ANALYSIS_BATCH:
        return read_analysis_batch(Path(option_values[ANALYSIS_BATCH_OPTION]))
    if path is ResolutionPath.JOB:
        return [read_complete_job(Path(option_values[JOB_OPTION]))]
    return [build_sample_job({name: option_values[name] for name in options})]


def build_sample_job(option_values: Mapping[str, str]) -> Job:
    """Assemble a job from a sample file plus optional analysis, preset and output."""
    draft = JobDraft()
    for name, handler in _SAMPLE_PATH_HANDLERS.items():
        value = option_values.get(name)
        if value is None:
            continue
        draft = handler(draft, value)
        logger.debug("Applied --%s %s", name, value)
    return draft.finalize()


def _read_sample_path_analysis(path: Path) -> Analysis:
    analysis = read_analysis(path)
    if is_legacy_analysis(analysis):
        # --sample always wins over a sample embedded in the analysis.
        logger.warning("Ignoring sample fields in legacy analysis %s; using --sample instead.", path)
        return clear_legacy_fields(analysis)
    return analysis


def read_complete_job(path: Path) -> Job:
    """Read a job file that must already carry its sample input."""
    job = read_job(path)
    if not job.has_sample_input():
        raise IncompleteLegacySample(NO_SAMPLE_MESSAGE)
    return job


def read_job_or_legacy_analysis(path: Path) -> Job:
    """Read a job file, falling back to the legacy analysis layout.

    Legacy files embed the sample in the analysis; the sample is moved into its
    own slot before the job is returned.
    """
    job = read_job(path)
    if job.has_sample_input():
        return job
    if not is_legacy_analysis(job.analysis):
        raise IncompleteLegacySample(NO_SAMPLE_MESSAGE)
    return migrate_legacy_job(job)


def read_analysis_batch(batch_file: Path) -> list[Job]:
    """Resolve each path listed in ``batch_file``; any failure aborts the batch."""
    paths = read_paths_from_batch_file(batch_file)
    if not paths:
        raise UnparseableDescriptor(f"Unable to read any analysis paths from batch file {batch_file}")
    jobs: list[Job] = []
    for index, path in enumerate(paths, start=1):
        logger.debug("Reading batch entry %d/%d: %s", index, len(paths), path)
        jobs.append(read_job_or_legacy_analysis(path))
    return jobs


__all__ = [
    "JobDraft",
    "build_sample_job",
    "merge_analysis",
    "merge_output_options",
    "merge_preset",
    "merge_sample_input",
    "read_analysis_batch",
    "read_complete_job",
    "read_job_or_legacy_analysis",
    "resolve_jobs",
]
