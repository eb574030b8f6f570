from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, wait
from typing import Sequence

from .runner import ProcessRunner
from .types import CommandInvocation, InvocationFailure, RunResult, RunResultSet


class ParallelExecutor:
    """Runs a batch of invocations at the same time and waits for all of them.

    Every invocation gets its own thread so the external processes really
    overlap. Workers never share state: each returns its own outcome and the
    merge happens after the join. An exception raised inside a worker is
    re-raised only once every invocation of the batch has settled.

    There is no timeout. A command that never exits blocks ``execute`` until
    it is killed from outside.
    """

    def __init__(self, runner: ProcessRunner):
        self.runner = runner

    def execute(self, invocations: Sequence[CommandInvocation]) -> RunResultSet:
        labels = [inv.label for inv in invocations]
        if len(set(labels)) != len(labels):
            raise ValueError(f"Invocation labels must be unique within a batch: {labels}")

        if not invocations:
            return RunResultSet()

        with ThreadPoolExecutor(
            max_workers=len(invocations), thread_name_prefix="txbench"
        ) as pool:
            futures = [pool.submit(self.runner.run, inv) for inv in invocations]
            wait(futures)

        results: list[RunResult] = []
        failures: list[InvocationFailure] = []
        for inv, future in zip(invocations, futures):
            outcome = future.result()
            if outcome.succeeded:
                results.append(
                    RunResult(inv.command, outcome.start_time, outcome.end_time)
                )
            else:
                failures.append(
                    InvocationFailure(
                        inv.command, inv.label, outcome.returncode, outcome.log_path
                    )
                )

        return RunResultSet(tuple(results), tuple(failures))
