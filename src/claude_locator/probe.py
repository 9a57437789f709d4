"""Liveness probe for candidate binaries."""

from __future__ import annotations

import logging
import subprocess

from claude_locator.environment import EnvironmentBuilder
from claude_locator.platforms import BasePlatform
from claude_locator.process import RunResult, SubprocessRunner
from claude_locator.protocols import ProcessRunner
from claude_locator.types import ProbeResult
from claude_locator.versions import extract_version

logger = logging.getLogger(__name__)

DEFAULT_VERSION_ARG = "--version"


class ProbeExecutor:
    """Runs candidates with the version argument to see if they work.

    Success is judged by exit status alone. A binary that exits 0 but prints
    no recognizable version is still functional.
    """

    def __init__(
        self,
        platform: BasePlatform,
        env_builder: EnvironmentBuilder,
        runner: ProcessRunner | None = None,
        version_arg: str = DEFAULT_VERSION_ARG,
        timeout: float | None = None,
    ) -> None:
        """Initialize the probe executor.

        Args:
            platform: Platform traits, for process-creation flags.
            env_builder: Builds the environment of each probe.
            runner: Process runner. Defaults to SubprocessRunner.
            version_arg: Argument that makes the tool print its version.
            timeout: Seconds before a probe is abandoned; None waits forever.

        Note:
            Prefer using factory method `create()` for construction.
        """
        self.platform = platform
        self.env_builder = env_builder
        self.runner = runner or SubprocessRunner()
        self.version_arg = version_arg
        self.timeout = timeout

    @classmethod
    def create(
        cls,
        platform: BasePlatform,
        env_builder: EnvironmentBuilder,
        runner: ProcessRunner | None = None,
        version_arg: str = DEFAULT_VERSION_ARG,
        timeout: float | None = None,
    ) -> ProbeExecutor:
        """Create a probe executor.

        Args:
            platform: Platform traits.
            env_builder: Environment builder.
            runner: Process runner.
            version_arg: Version query argument.
            timeout: Optional probe timeout in seconds.

        Returns:
            Configured ProbeExecutor instance.
        """
        return cls(
            platform=platform,
            env_builder=env_builder,
            runner=runner,
            version_arg=version_arg,
            timeout=timeout,
        )

    def run_version_query(self, path: str) -> RunResult | None:
        """Spawn a program with the version argument.

        Args:
            path: Program path or bare name.

        Returns:
            The finished process, or None if it could not be run.
        """
        try:
            return self.runner.run(
                [path, self.version_arg],
                env=self.env_builder.build_env(path),
                creation_flags=self.platform.creation_flags,
                timeout=self.timeout,
            )
        except OSError as e:
            logger.debug("Failed to run %s: %s", path, e)
        except subprocess.TimeoutExpired:
            logger.warning("Probe of %s timed out after %ss", path, self.timeout)
        return None

    def probe(self, path: str) -> ProbeResult:
        """Check whether a candidate runs, and read its version.

        Args:
            path: Candidate path or bare command name.

        Returns:
            ProbeResult; version is None when not functional or not printed.
        """
        logger.debug("Testing binary at: %s", path)
        result = self.run_version_query(path)
        if result is None:
            return ProbeResult(functional=False)

        if not result.success:
            logger.debug(
                "Version command for %s exited %d: %s",
                path,
                result.returncode,
                result.stderr.decode("utf-8", errors="replace").strip(),
            )
            return ProbeResult(functional=False)

        return ProbeResult(functional=True, version=extract_version(result.stdout))
