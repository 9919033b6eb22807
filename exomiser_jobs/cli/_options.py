"""Select how a set of command-line options is turned into jobs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum

from ._constants import (
    ANALYSIS_BATCH_OPTION,
    ANALYSIS_OPTION,
    JOB_OPTION,
    NO_SAMPLE_MESSAGE,
    SAMPLE_COMPANION_OPTIONS,
    SAMPLE_OPTION,
)
from ._errors import InvalidOptionCombination

logger = logging.getLogger(__name__)


class ResolutionPath(Enum):
    """Ways of building jobs from the supplied options."""

    ANALYSIS = "analysis"
    ANALYSIS_BATCH = "analysis-batch"
    JOB = "job"
    SAMPLE = "sample"


_EXACT_PATHS: dict[frozenset[str], ResolutionPath] = {
    frozenset({ANALYSIS_OPTION}): ResolutionPath.ANALYSIS,
    frozenset({ANALYSIS_BATCH_OPTION}): ResolutionPath.ANALYSIS_BATCH,
    frozenset({JOB_OPTION}): ResolutionPath.JOB,
}


def collect_option_names(option_values: Mapping[str, str | None]) -> frozenset[str]:
    """Return the names of the options that were actually supplied."""
    return frozenset(name for name, value in option_values.items() if value is not None)


def select_resolution_path(options: Iterable[str]) -> ResolutionPath:
    """Classify the supplied option names into a single resolution path.

    ``--analysis``, ``--analysis-batch`` and ``--job`` must each be given alone.
    Anything else needs ``--sample``, optionally with ``--analysis``,
    ``--preset`` and ``--output``.
    """
    option_set = frozenset(options)
    logger.debug("Parsed options: %s", sorted(option_set))

    exact = _EXACT_PATHS.get(option_set)
    if exact is not None:
        return exact

    if SAMPLE_OPTION not in option_set:
        raise InvalidOptionCombination(NO_SAMPLE_MESSAGE)

    unexpected = option_set - SAMPLE_COMPANION_OPTIONS - {SAMPLE_OPTION}
    if unexpected:
        flags = ", ".join(f"--{name}" for name in sorted(unexpected))
        raise InvalidOptionCombination(f"--sample cannot be combined with {flags}.")
    return ResolutionPath.SAMPLE


__all__ = ["ResolutionPath", "collect_option_names", "select_resolution_path"]
