"""Small shared constants for CLI modules.

Option names are the long flag names without the leading dashes; they are the
vocabulary the option combination validator works with.
"""

from __future__ import annotations

COMMAND = "exomiser-jobs"

ANALYSIS_OPTION = "analysis"
ANALYSIS_BATCH_OPTION = "analysis-batch"
JOB_OPTION = "job"
SAMPLE_OPTION = "sample"
PRESET_OPTION = "preset"
OUTPUT_OPTION = "output"

JOB_OPTIONS = (
    ANALYSIS_OPTION,
    ANALYSIS_BATCH_OPTION,
    JOB_OPTION,
    SAMPLE_OPTION,
    PRESET_OPTION,
    OUTPUT_OPTION,
)

# Options that may accompany --sample.
SAMPLE_COMPANION_OPTIONS = frozenset({ANALYSIS_OPTION, PRESET_OPTION, OUTPUT_OPTION})

NO_SAMPLE_MESSAGE = "No sample specified!"
BATCH_COMMENT_PREFIX = "#"
