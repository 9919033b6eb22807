"""Migrate legacy analysis files into the current sample/analysis split.

Analysis files written for releases 8.0.0 to 12.1.0 carry the sample inside
the analysis. Such a job is rewritten so the sample lives in its own slot and
the deprecated analysis fields are cleared.
"""

from __future__ import annotations

import logging

from ._constants import NO_SAMPLE_MESSAGE
from ._errors import IncompleteLegacySample
from ._schemas import Analysis, Job, Sample

logger = logging.getLogger(__name__)


def is_legacy_analysis(analysis: Analysis | None) -> bool:
    if analysis is None:
        return False
    return any(getattr(analysis, name) for name in Analysis.LEGACY_FIELDS)


def extract_sample(analysis: Analysis) -> Sample:
    """Copy the embedded sample out of a legacy analysis.

    Both the phenotypes and the VCF are required. This also rejects current
    analysis files, which carry no sample information at all.
    """
    sample = Sample(**{name: getattr(analysis, name) for name in Analysis.LEGACY_FIELDS})
    if not sample.hpo_ids or not sample.vcf_path:
        raise IncompleteLegacySample(NO_SAMPLE_MESSAGE)
    return sample


def clear_legacy_fields(analysis: Analysis) -> Analysis:
    # age and sex never appear in legacy analysis files, so nothing else is migrated.
    cleared = {name: Analysis.model_fields[name].default for name in Analysis.LEGACY_FIELDS}
    return analysis.model_copy(update=cleared)


def migrate_legacy_job(job: Job) -> Job:
    """Move the sample out of a legacy analysis; other jobs are returned unchanged."""
    if not is_legacy_analysis(job.analysis):
        return job
    sample = extract_sample(job.analysis)
    logger.info("Migrating legacy analysis for sample %s", sample.vcf_path)
    return job.model_copy(
        update={
            "sample_input": sample,
            "analysis": clear_legacy_fields(job.analysis),
        }
    )


__all__ = ["clear_legacy_fields", "extract_sample", "is_legacy_analysis", "migrate_legacy_job"]
