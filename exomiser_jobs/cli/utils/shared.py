"""Shared helper utilities for the job CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

import yaml
from rich.console import Console
from rich.logging import RichHandler

from .._schemas import Job

_LOGGING_INITIALIZED = False


def ensure_root_logging(level: str) -> None:
    """Configure root logging once while allowing level updates."""
    global _LOGGING_INITIALIZED
    root_logger = logging.getLogger()
    if not _LOGGING_INITIALIZED:
        handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root_logger.addHandler(handler)
        _LOGGING_INITIALIZED = True
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        handler.setLevel(level)


def jobs_to_documents(jobs: Sequence[Job]) -> list[dict[str, Any]]:
    return [job.to_document() for job in jobs]


def dump_jobs_json(jobs: Sequence[Job]) -> str:
    return json.dumps(jobs_to_documents(jobs), indent=2)


def dump_jobs_yaml(jobs: Sequence[Job]) -> str:
    return yaml.safe_dump(jobs_to_documents(jobs), sort_keys=False)


def describe_sample_input(job: Job) -> str:
    """Short human-readable label for the job's sample input."""
    if job.sample is not None:
        return job.sample.vcf_path or job.sample.proband_id or "sample"
    if job.phenopacket is not None:
        return job.phenopacket.id or "phenopacket"
    if job.family is not None:
        return job.family.id or "family"
    return "-"
