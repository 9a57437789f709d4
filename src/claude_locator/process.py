"""Process spawning for probes and lookups."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Exit status and raw output of a finished process."""

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        """True if the process exited with status 0."""
        return self.returncode == 0


class SubprocessRunner:
    """Production process runner.

    Satisfies the ProcessRunner protocol structurally.
    """

    def run(
        self,
        args: Sequence[str],
        env: Mapping[str, str] | None = None,
        creation_flags: int = 0,
        timeout: float | None = None,
    ) -> RunResult:
        """Run a program to completion and capture its output.

        Args:
            args: Program path or bare name followed by its arguments.
            env: Complete environment for the child; None inherits ours.
            creation_flags: Platform process-creation flags. Only passed
                through when non-zero; POSIX rejects any other value.
            timeout: Seconds to wait before giving up, None waits forever.

        Returns:
            Exit status and captured output.

        Raises:
            OSError: If the program cannot be started.
            subprocess.TimeoutExpired: If the timeout elapses.
        """
        kwargs = {}
        if creation_flags:
            kwargs["creationflags"] = creation_flags

        logger.debug("Running %s", list(args))
        completed = subprocess.run(
            list(args),
            env=dict(env) if env is not None else None,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            timeout=timeout,
            check=False,
            **kwargs,
        )
        return RunResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
