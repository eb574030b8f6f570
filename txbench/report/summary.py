from __future__ import annotations

from dataclasses import dataclass, field

from txbench.executor.types import RunResultSet, elapsed_seconds, round_half_up


@dataclass(frozen=True)
class AssetSummary:
    asset_name: str
    results: RunResultSet
    batch_start: float
    batch_end: float
    reference_duration: int | None

    @property
    def total(self) -> int:
        # Wall clock span of the whole batch, so one slow run stretches it
        return elapsed_seconds(self.batch_start, self.batch_end)

    @property
    def average(self) -> int:
        if len(self.results) == 0:
            return 0
        return sum(r.elapsed for r in self.results) // len(self.results)

    @property
    def percentage(self) -> int | None:
        if not self.reference_duration:
            return None
        return round_half_up(self.total / self.reference_duration * 100)


def summarize(
    asset_name: str,
    results: RunResultSet,
    batch_start: float,
    batch_end: float,
    reference_duration: int | None,
) -> AssetSummary:
    return AssetSummary(asset_name, results, batch_start, batch_end, reference_duration)


@dataclass(frozen=True)
class AssetRow:
    asset_name: str
    summary: AssetSummary | None = None
    error: str | None = None

    @property
    def failures(self) -> int:
        return len(self.summary.results.failures) if self.summary else 0


@dataclass
class ReportSection:
    test_name: str
    parallel: int
    rows: list[AssetRow] = field(default_factory=list)


@dataclass
class Report:
    host: str
    assets: list[str]
    sections: list[ReportSection] = field(default_factory=list)

    def failed_invocations(self) -> int:
        return sum(row.failures for section in self.sections for row in section.rows)

    def missing_rows(self) -> list[tuple[ReportSection, AssetRow]]:
        return [
            (section, row)
            for section in self.sections
            for row in section.rows
            if row.summary is None
        ]
