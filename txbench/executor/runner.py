import logging
import subprocess
import time
from pathlib import Path
from typing import Callable

from .types import CommandInvocation, RunOutcome

logger = logging.getLogger(__name__)


class ProcessRunner:
    """Runs one invocation through the shell and times it.

    Output goes to ``<log_dir>/<label>.txt``. The log is removed on success
    unless ``keep_outputs`` is set, and kept for inspection on failure.
    """

    def __init__(
        self,
        log_dir: str | Path,
        *,
        keep_outputs: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.log_dir = Path(log_dir)
        self.keep_outputs = keep_outputs
        self.clock = clock

    def log_path(self, invocation: CommandInvocation) -> Path:
        return self.log_dir / f"{invocation.label}.txt"

    def run(self, invocation: CommandInvocation) -> RunOutcome:
        log_path = self.log_path(invocation)
        logger.debug("Executing: %s > %s", invocation.command, log_path)

        start = self.clock()
        try:
            with log_path.open("wb") as log:
                proc = subprocess.run(
                    invocation.command,
                    shell=True,
                    stdout=log,
                    stderr=subprocess.STDOUT,
                )
            returncode: int | None = proc.returncode
        except OSError as exc:
            returncode = None
            logger.error("Could not launch '%s': %s", invocation.command, exc)
        end = self.clock()

        succeeded = returncode == 0
        if succeeded:
            if not self.keep_outputs:
                log_path.unlink(missing_ok=True)
        else:
            logger.error(
                "Got back exit code %s from command '%s'", returncode, invocation.command
            )
            logger.error("Results written to %s", log_path)

        return RunOutcome(succeeded, start, end, returncode, log_path)
