from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    The builtin ``round`` rounds ties to even, which would make 2.5s show as 2.
    """
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def elapsed_seconds(start_time: float, end_time: float) -> int:
    return round_half_up(end_time - start_time)


@dataclass(frozen=True)
class CommandInvocation:
    command: str
    label: str


@dataclass(frozen=True)
class RunOutcome:
    succeeded: bool
    start_time: float
    end_time: float
    returncode: int | None
    log_path: Path


@dataclass(frozen=True)
class RunResult:
    command: str
    start_time: float
    end_time: float
    succeeded: bool = True

    @property
    def elapsed(self) -> int:
        return elapsed_seconds(self.start_time, self.end_time)


@dataclass(frozen=True)
class InvocationFailure:
    command: str
    label: str
    returncode: int | None
    log_path: Path


@dataclass(frozen=True)
class RunResultSet:
    results: tuple[RunResult, ...] = ()
    failures: tuple[InvocationFailure, ...] = ()

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    @property
    def attempted(self) -> int:
        return len(self.results) + len(self.failures)
