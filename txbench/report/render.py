from __future__ import annotations

import csv
from datetime import datetime
from pathlib import Path

from .summary import AssetSummary, Report

NOT_APPLICABLE = "N/A"


def default_csv_name(tests_file: str | Path, host: str, now: datetime | None = None) -> str:
    now = now or datetime.now()
    stem = Path(tests_file).stem
    return f"{stem}-{host}-{now.strftime('%Y-%m-%d-%H.%M')}.csv"


def _percentage(summary: AssetSummary) -> str:
    pct = summary.percentage
    return NOT_APPLICABLE if pct is None else f"{pct}%"


def _duration(summary: AssetSummary) -> str:
    duration = summary.reference_duration
    return NOT_APPLICABLE if duration is None else str(duration)


def render_rows(report: Report) -> list[list[str]]:
    rows: list[list[str]] = [["", *report.assets]]

    for section in report.sections:
        rows.append(
            [
                f"Transcode test ('{report.host}') '{section.test_name}'"
                f" - {section.parallel} process(es)"
            ]
        )

        average = ["Average"]
        elapsed = ["Elapsed time"]
        percentage = ["Percentage of real time"]
        duration = ["Clip duration"]
        for row in section.rows:
            summary = row.summary
            if summary is None:
                for line in (average, elapsed, percentage, duration):
                    line.append("")
                continue

            average.append(str(summary.average))
            elapsed.append(str(summary.total))
            percentage.append(_percentage(summary))
            duration.append(_duration(summary))

        rows.extend([average, elapsed, percentage, duration, [], []])

    return rows


def write_csv(report: Report, path: str | Path) -> Path:
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerows(render_rows(report))
    return path
