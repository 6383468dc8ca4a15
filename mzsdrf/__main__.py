# mzsdrf/__main__.py
import argparse
import logging
import sys
from pathlib import Path

from mzsdrf.annotate import annotate_mzml
from mzsdrf.core.exceptions import MzSdrfError
from mzsdrf.patcher import DEFAULT_PROGRESS_INTERVAL, PatchContext
from mzsdrf.utils.logging_config import setup_logging


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Add SDRF sample metadata to an mzML stream. "
        "Reads mzML from stdin and writes the annotated mzML to stdout."
    )

    parser.add_argument("sdrf", help="Path to the SDRF sample annotation table")
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=DEFAULT_PROGRESS_INTERVAL,
        help="Log progress every N spectrum groups (0 disables progress lines)",
    )
    parser.add_argument(
        "--progress-bar",
        action="store_true",
        help="Show a progress bar on stderr",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level",
    )
    parser.add_argument("--log-file", default=None, help="Path to the log file")

    return parser


def _validate_arguments(parser: argparse.ArgumentParser, args) -> None:
    """Validate command line arguments."""
    if args.progress_interval < 0:
        parser.error(
            "Progress interval cannot be negative (got: {})".format(args.progress_interval)
        )

    sdrf_path = Path(args.sdrf)
    if not sdrf_path.is_file():
        parser.error(f"SDRF file does not exist: {sdrf_path}")


def main() -> None:
    """Main entry point for the CLI."""
    parser = _create_argument_parser()
    args = parser.parse_args()
    _validate_arguments(parser, args)

    logger = setup_logging(
        log_level=getattr(logging, args.log_level), log_file=args.log_file
    )
    context = PatchContext(
        logger=logger.getChild("patcher"),
        progress_interval=args.progress_interval,
        show_progress=args.progress_bar,
    )

    try:
        summary = annotate_mzml(args.sdrf, sys.stdin.buffer, sys.stdout.buffer, context)
    except MzSdrfError as e:
        logger.error(f"Annotation failed: {e}")
        sys.exit(1)

    logger.info(
        f"Annotated {summary.source_file} with {summary.n_samples} samples "
        f"({summary.n_spectra} spectra in {summary.n_groups} groups)"
    )


if __name__ == "__main__":
    main()
