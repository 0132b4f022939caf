"""
Command line interface for nunit-scaffold.

    nunit-scaffold "A.cs|B.cs" out 2 4 2

Arguments, in order: '|'-separated input paths, output directory, and the
parallelism of the Read, Generate and Write stages.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .constants import INPUT_PATH_SEPARATOR
from .core.exceptions import ScaffoldError, UsageError
from .core.pipeline import PipelineReport, run_pipeline

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str):
        raise UsageError(message)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parallelism(value: str) -> int:
    """argparse type for a stage's degree of parallelism (integer >= 1)."""
    try:
        workers = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"parallelism must be an integer (got {value!r})")
    if workers < 1:
        raise argparse.ArgumentTypeError(f"parallelism must be at least 1 (got {workers})")
    return workers


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = _Parser(
        prog="nunit-scaffold",
        description="Generate NUnit test scaffolds for C# source files"
    )
    parser.add_argument(
        "paths",
        help=f"Input C# files separated by '{INPUT_PATH_SEPARATOR}'"
    )
    parser.add_argument("output_dir", help="Directory receiving the generated test files")
    parser.add_argument("read_workers", type=parallelism, help="Parallelism of the read stage")
    parser.add_argument("generate_workers", type=parallelism, help="Parallelism of the generate stage")
    parser.add_argument("write_workers", type=parallelism, help="Parallelism of the write stage")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def split_paths(value: str) -> list[str]:
    """Split the '|'-separated path list, dropping empty entries."""
    return [path for path in value.split(INPUT_PATH_SEPARATOR) if path.strip()]


def print_summary(report: PipelineReport) -> None:
    """Print brief summary of a pipeline run."""
    print(f"Read {len(report.read)} file(s), wrote {len(report.written)} test file(s)")
    for failure in report.failures:
        print(f"  failed [{failure.stage}] {failure.item}: {failure.error}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point; returns the process exit code."""
    parser = create_parser()

    try:
        args = parser.parse_args(argv)
        paths = split_paths(args.paths)
        if not paths:
            raise UsageError("at least one input path is required")
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logging(args.verbose)

    try:
        report = asyncio.run(run_pipeline(
            paths,
            args.output_dir,
            read_workers=args.read_workers,
            generate_workers=args.generate_workers,
            write_workers=args.write_workers
        ))
    except ScaffoldError as e:
        logger.debug("Pipeline aborted", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print_summary(report)
    return EXIT_OK if report.success else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
