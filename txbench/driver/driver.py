from __future__ import annotations

import logging
import time
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Sequence

from txbench.config.types import BenchOptions, ConfigError, SuiteConfig, TestConfig
from txbench.executor import CommandInvocation, ParallelExecutor, ProcessRunner
from txbench.media import MediaInfo, build_command, cleanup_filename, inspect_media, replicate
from txbench.report import AssetRow, Report, ReportSection, summarize

logger = logging.getLogger(__name__)

Inspector = Callable[[Path], MediaInfo]
Replicator = Callable[[Path, Path, int], list[Path]]


class DriverState(Enum):
    NOT_STARTED = auto()
    RUNNING = auto()
    COMPLETED = auto()


def invocation_label(src_file: Path, test: TestConfig, parallel: int) -> str:
    return (
        f"{cleanup_filename(src_file.stem)}-"
        f"{cleanup_filename(test.name)}_{parallel}{test.ext}"
    )


def _check_unique_stems(sources: Sequence[Path]) -> None:
    # Copies and output files are named after the stem only
    seen: dict[str, Path] = {}
    for src in sources:
        stem = cleanup_filename(src.stem)
        if stem in seen:
            raise ConfigError(f"Source assets share the name '{stem}': {seen[stem]}, {src}")
        seen[stem] = src


class TestRunDriver:
    __test__ = False  # not a pytest class

    def __init__(
        self,
        suite: SuiteConfig,
        sources: Sequence[Path],
        output_dir: str | Path,
        *,
        options: BenchOptions | None = None,
        host: str = "localhost",
        inspector: Inspector = inspect_media,
        replicator: Replicator = replicate,
        executor: ParallelExecutor | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.suite = suite
        self.sources = sorted(Path(src) for src in sources)
        _check_unique_stems(self.sources)
        self.output_dir = Path(output_dir)
        self.options = options or BenchOptions()
        self.host = host
        self.inspector = inspector
        self.replicator = replicator
        self.executor = executor or ParallelExecutor(
            ProcessRunner(self.options.log_dir, keep_outputs=self.options.keep_outputs)
        )
        self.clock = clock
        self.state = DriverState.NOT_STARTED
        self._media: dict[Path, MediaInfo] = {}

    def run(self) -> Report:
        if self.state is not DriverState.NOT_STARTED:
            raise RuntimeError("A driver can only run once")

        self.state = DriverState.RUNNING
        report = Report(self.host, [src.name for src in self.sources])

        for test in self.suite:
            for parallel in test.processes:
                logger.info("Running '%s' with %d process(es)", test.name, parallel)
                section = ReportSection(test.name, parallel)
                for src in self.sources:
                    section.rows.append(self._run_asset(test, parallel, src))
                report.sections.append(section)

        self.state = DriverState.COMPLETED
        return report

    def media_info(self, src: Path) -> MediaInfo:
        if src not in self._media:
            self._media[src] = self.inspector(src)
        return self._media[src]

    def build_invocations(
        self, test: TestConfig, parallel: int, src: Path, media: MediaInfo
    ) -> list[CommandInvocation]:
        inputs = [*self.replicator(src, self.output_dir, parallel - 1), src]

        invocations = []
        for tx_file in inputs:
            label = invocation_label(Path(tx_file), test, parallel)
            command = build_command(test, media, tx_file, self.output_dir / label)
            invocations.append(CommandInvocation(command, label))

        return invocations

    def _run_asset(self, test: TestConfig, parallel: int, src: Path) -> AssetRow:
        media = self.media_info(src)

        try:
            invocations = self.build_invocations(test, parallel, src, media)
        except OSError as exc:
            logger.warning(
                "Skipping '%s' for '%s' (%d process(es)): %s",
                src.name,
                test.name,
                parallel,
                exc,
            )
            return AssetRow(src.name, error=str(exc))

        logger.info("Transcoding %s x%d", src.name, len(invocations))
        batch_start = self.clock()
        results = self.executor.execute(invocations)
        batch_end = self.clock()

        summary = summarize(src.name, results, batch_start, batch_end, media.duration_s)
        return AssetRow(src.name, summary)
