from __future__ import annotations

import argparse
import logging
import socket
import sys
from pathlib import Path

from txbench.config import BenchOptions, ConfigError, load_suite
from txbench.driver import TestRunDriver
from txbench.media import clean_output_dir, find_sources
from txbench.report import Report, default_csv_name, write_csv

from .args import build_parser

logger = logging.getLogger(__name__)


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)

        match args.command:
            case "run":
                return cmd_run(args)
            case "list":
                return cmd_list(args)
            case _:
                return 2

    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    except KeyboardInterrupt:
        return 130


def cmd_run(args: argparse.Namespace) -> int:
    _setup_logging(args.verbose)

    suite = load_suite(args.config)
    source = _existing_dir(args.source)
    output = _existing_dir(args.output)
    if output.resolve().is_relative_to(source.resolve()):
        raise ConfigError(f"Output folder {output} must not be inside source folder {source}")

    host = socket.gethostname()
    csv_path = Path(args.csv or default_csv_name(args.config, host))
    if csv_path.exists():
        raise ConfigError(f"{csv_path} exists, please remove or rename!")

    sources = find_sources(source, args.pattern)
    if not sources:
        raise ConfigError(f"No files matching '{args.pattern}' under {source}")

    options = BenchOptions(keep_outputs=args.keep_outputs)
    if args.log_dir is not None:
        options = BenchOptions(args.keep_outputs, _existing_dir(args.log_dir))

    driver = TestRunDriver(suite, sources, output, options=options, host=host)

    # Leftovers from a previous run would be picked up as copies
    clean_output_dir(output)
    try:
        report = driver.run()
    finally:
        if not options.keep_outputs:
            clean_output_dir(output)

    write_csv(report, csv_path)
    logger.info("Results written to %s", csv_path)
    _print_result(report)

    return 1 if report.failed_invocations() or report.missing_rows() else 0


def cmd_list(args: argparse.Namespace) -> int:
    suite = load_suite(args.config)
    for test in suite:
        processes = " ".join(str(p) for p in test.processes)
        print(f"{test.name}: {processes}")
    return 0


def _existing_dir(path: str) -> Path:
    pure_path = Path(path).expanduser()
    if not pure_path.is_dir():
        raise ConfigError(f"{pure_path} is not a directory or is not readable!")
    return pure_path


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(message)s",
        stream=sys.stderr,
    )


def _print_result(report: Report) -> None:
    for section in report.sections:
        for row in section.rows:
            prefix = f"{section.test_name} x{section.parallel} {row.asset_name}"
            if row.summary is None:
                print(f"SKIP {prefix}, {row.error}")
            elif row.failures:
                print(
                    f"FAIL {prefix}, {row.failures} failed, average {row.summary.average}s"
                )
            else:
                print(f"OK {prefix}, average {row.summary.average}s")
