from __future__ import annotations

import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="txbench",
        description="Transcode a series of files and output timings in CSV format",
    )

    parser.add_argument(
        "--config",
        default="txbench.yml",
        help="Path to tests file",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
    )

    # run
    run = subparsers.add_parser("run", help="Run the benchmark")
    run.add_argument("source", help="Directory scanned for source assets")
    run.add_argument("output", help="Directory for copies and transcoded files")
    run.add_argument(
        "--csv",
        default=None,
        help="CSV file to write (default: <tests>-<host>-<timestamp>.csv)",
    )
    run.add_argument(
        "--pattern",
        default="*.mov",
        help="Glob matched against source file names",
    )
    run.add_argument(
        "--keep-outputs",
        action="store_true",
        help="Keep logs of successful runs and the output folder contents",
    )
    run.add_argument(
        "--log-dir",
        default=None,
        help="Directory for per-invocation logs (default: system temp dir)",
    )
    run.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every command and file operation",
    )

    # list
    subparsers.add_parser("list", help="List tests and their process counts")

    return parser
