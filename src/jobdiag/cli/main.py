"""
Command-line interface for the jobdiag resource diagnosis tool.

Reads the detector results of one job execution from a JSON file, runs the
diagnosis with the configured thresholds and prints the report. Optionally
exports every report chart as a plot file.

Input file shape:
    {"jobId": "...", "detectorResults": [{"category": "...", "data": {...}}]}
"""

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ..config import get_config, set_config_path
from ..config.validators import LOG_LEVELS
from ..diagnosis import DiagnosisOrchestrator
from ..models.findings import DetectorResult
from ..reporting import render_text_summary, report_to_json
from ..validation import ValidationError, handle_cli_error, validate_positive_integer

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"


def _setup_logging(level: str, to_stderr: bool) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr if to_stderr else sys.stdout,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobdiag",
        description="Diagnose resource waste of a finished batch job from its detector results.",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="JSON file holding the job id and its detector results.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml of the installation.",
    )
    parser.add_argument(
        "--job-id",
        type=str,
        help="Job id to report under. Overrides 'jobId' from the input file.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "text"],
        default="json",
        help="Report output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the report to this file instead of stdout.",
    )
    parser.add_argument(
        "--plot-dir",
        type=Path,
        help="Export report charts as HTML (and PNG, with Kaleido) into this directory.",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=None,
        help="Run analyzers on a thread pool. Defaults to [diagnosis] parallel from config.",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Thread pool size for --parallel. Defaults to [diagnosis] max_workers from config.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging level. Defaults to [logging] level from config.",
    )
    return parser


def load_detector_results(input_path: Path) -> tuple:
    """
    Read an input file.

    Returns:
        Tuple of (job id or None, list of DetectorResult).

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not JSON of the expected shape
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    with open(input_path, "r", encoding="utf-8") as f:
        document: Any = json.load(f)

    if not isinstance(document, dict):
        raise ValueError("Input must be a JSON object with a 'detectorResults' list")
    raw_results = document.get("detectorResults", [])
    if not isinstance(raw_results, list):
        raise ValueError("'detectorResults' must be a list")

    results: List[DetectorResult] = []
    for index, raw in enumerate(raw_results):
        try:
            results.append(DetectorResult.from_dict(raw))
        except ValueError as e:
            logger.warning(f"Ignoring detector result #{index}: {e}")

    job_id = document.get("jobId")
    return (str(job_id) if job_id is not None else None), results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the diagnosis CLI.

    Args:
        argv: Command-line arguments, defaults to sys.argv[1:].

    Returns:
        Process exit code.

    Raises:
        SystemExit: On configuration or input errors.
    """
    args = build_parser().parse_args(argv)

    _setup_logging(args.log_level or "INFO", to_stderr=args.output is None)

    # Load application configuration
    if args.config is not None:
        set_config_path(args.config)
    try:
        app_config = get_config()
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)

    if args.log_level is None:
        logging.getLogger().setLevel(getattr(logging, app_config.log_level))

    try:
        input_job_id, results = load_detector_results(args.input)
    except (OSError, ValueError) as e:
        handle_cli_error(error=e, context=f"reading {args.input}", exit_code=1, logger=logger)

    job_id = args.job_id or input_job_id or args.input.stem

    settings = app_config.diagnosis
    max_workers = settings.max_workers
    if args.max_workers is not None:
        try:
            max_workers = validate_positive_integer(
                args.max_workers, min_value=1, max_value=64, field_name="--max-workers"
            )
        except ValidationError as e:
            handle_cli_error(error=e, context="parsing arguments", exit_code=1, logger=logger)

    orchestrator = DiagnosisOrchestrator(
        parallel=settings.parallel if args.parallel is None else args.parallel,
        max_workers=max_workers,
    )
    report = orchestrator.diagnose(job_id, results, app_config.detector)

    rendered = report_to_json(report) if args.format == "json" else render_text_summary(report)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(rendered + "\n", encoding="utf-8")
        logger.info(f"Report written to {args.output}")
    else:
        sys.stdout.write(rendered + "\n")

    if args.plot_dir is not None:
        from ..plotter import plot_report

        plot_report(report, args.plot_dir)

    return 0


def main_cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
