from .parallel import ParallelExecutor
from .runner import ProcessRunner
from .types import (
    CommandInvocation,
    InvocationFailure,
    RunOutcome,
    RunResult,
    RunResultSet,
    elapsed_seconds,
    round_half_up,
)

__all__ = [
    "ParallelExecutor",
    "ProcessRunner",
    "CommandInvocation",
    "InvocationFailure",
    "RunOutcome",
    "RunResult",
    "RunResultSet",
    "elapsed_seconds",
    "round_half_up",
]
