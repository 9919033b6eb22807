"""Command-line entry point that resolves job descriptors."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from rich.console import Console
from rich.table import Table

from exomiser_jobs.cli._constants import COMMAND, JOB_OPTIONS
from exomiser_jobs.cli._errors import InvalidOptionCombination, JobResolutionError
from exomiser_jobs.cli._job_builder import resolve_jobs
from exomiser_jobs.cli._schemas import Job
from exomiser_jobs.cli.utils.shared import (
    describe_sample_input,
    dump_jobs_json,
    dump_jobs_yaml,
    ensure_root_logging,
)

logger = logging.getLogger(__name__)

OUTPUT_STYLES = ("table", "json", "yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=COMMAND,
        description="Resolve sample, analysis, preset and output descriptors into jobs.",
    )
    parser.add_argument(
        "--analysis",
        help="Path to a job or legacy analysis file. Combined with --sample it is read as an analysis.",
    )
    parser.add_argument(
        "--analysis-batch",
        help="Path to a text file listing one job or legacy analysis file per line.",
    )
    parser.add_argument("--job", help="Path to a job file containing the sample, analysis and output options.")
    parser.add_argument("--sample", help="Path to a sample, phenopacket or family file.")
    parser.add_argument("--preset", help="Analysis preset to use with --sample: exome (default) or genome.")
    parser.add_argument("--output", help="Path to an output options file to use with --sample.")
    parser.add_argument(
        "--format",
        choices=OUTPUT_STYLES,
        default="table",
        help="How to print the resolved jobs (default: %(default)s).",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    ensure_root_logging("DEBUG" if args.verbose else "INFO")

    option_values = {name: getattr(args, name.replace("-", "_")) for name in JOB_OPTIONS}
    try:
        jobs = resolve_jobs(option_values)
    except InvalidOptionCombination as exc:
        parser.error(str(exc))
    except (JobResolutionError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1

    _print_jobs(jobs, style=args.format)
    return 0


def _print_jobs(jobs: Sequence[Job], *, style: str) -> None:
    if style == "json":
        sys.stdout.write(dump_jobs_json(jobs) + "\n")
        return
    if style == "yaml":
        sys.stdout.write(dump_jobs_yaml(jobs))
        return

    console = Console()
    table = Table(title="Resolved Jobs", expand=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Input", style="yellow")
    table.add_column("Source", style="bold cyan", overflow="fold")
    table.add_column("Preset", style="magenta")
    table.add_column("Analysis", style="green")
    table.add_column("Outputs", style="white", overflow="fold")

    for index, job in enumerate(jobs, start=1):
        output_options = job.output_options
        formats = ", ".join(output_options.model_dump(mode="json")["output_formats"]) or "-"
        prefix = output_options.output_prefix or "-"
        table.add_row(
            str(index),
            job.sample_input_kind or "-",
            describe_sample_input(job),
            job.preset.value,
            "yes" if job.analysis is not None else "-",
            f"{prefix} ({formats})",
        )

    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
