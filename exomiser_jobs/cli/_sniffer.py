"""Read descriptor files whose shape is only known by trying candidate schemas."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TypeVar

from ._config_loader import decode_document, load_document
from ._errors import UnparseableDescriptor
from ._schemas import Analysis, Descriptor, Family, Job, OutputOptions, Phenopacket, Sample, SampleInput

logger = logging.getLogger(__name__)

DescriptorT = TypeVar("DescriptorT", bound=Descriptor)

# Probe order for sample files; the first non-empty decode wins.
SAMPLE_INPUT_CANDIDATES: tuple[type[Descriptor], ...] = (Sample, Phenopacket, Family)


def read_sample_input(path: str | Path) -> SampleInput:
    """Decode a sample file as a Sample, Phenopacket or Family, in that order."""
    data = load_document(path)
    for shape in SAMPLE_INPUT_CANDIDATES:
        decoded = decode_document(data, shape)
        if not decoded.is_empty():
            logger.debug("Read %s as %s.", path, shape.__name__)
            return decoded
    raise UnparseableDescriptor(f"Unable to parse sample from file {path}, please check the format")


def read_analysis(path: str | Path) -> Analysis:
    return _read_single_shape(path, Analysis, kind="analysis")


def read_output_options(path: str | Path) -> OutputOptions:
    return _read_single_shape(path, OutputOptions, kind="outputOptions")


def read_job(path: str | Path) -> Job:
    return _read_single_shape(path, Job, kind="job")


def _read_single_shape(path: str | Path, shape: type[DescriptorT], *, kind: str) -> DescriptorT:
    decoded = decode_document(load_document(path), shape)
    if decoded.is_empty():
        raise UnparseableDescriptor(f"Unable to parse {kind} from file {path}, please check the format")
    return decoded


__all__ = [
    "SAMPLE_INPUT_CANDIDATES",
    "read_analysis",
    "read_job",
    "read_output_options",
    "read_sample_input",
]
