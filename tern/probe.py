# Tern Completion Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Shell probe capability handed to grammar generators.

A generator may need to look at the machine before deciding what grammar to
return, for example to list installed plugins. It gets a `ShellProbe`: an async
callable that runs one external command without a shell, captures its output,
and gives up after a fixed timeout. Probes never raise for command failures;
the outcome is reported through `ProbeResult.status`.
"""
from __future__ import annotations

import asyncio
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Protocol, Sequence, runtime_checkable

from tern.logger import logger

DEFAULT_PROBE_TIMEOUT = 5.0
TIMEOUT_STATUS = 124
NOT_FOUND_STATUS = 127


@dataclass(frozen=True)
class ProbeResult:
    """Captured outcome of a probe command."""

    stdout: str
    stderr: str
    status: int

    @property
    def ok(self) -> bool:
        return self.status == 0


@runtime_checkable
class ShellProbe(Protocol):
    def __call__(
        self,
        command: str,
        args: Sequence[str] = (),
        cwd: str | Path | None = None,
    ) -> Awaitable[ProbeResult]: ...


def build_shell_probe(timeout: float = DEFAULT_PROBE_TIMEOUT) -> ShellProbe:
    """
    Build a probe bound to `timeout` seconds.

    Args:
        timeout (float): Seconds before the probed command is abandoned.

    Returns:
        ShellProbe: The probe callable.
    """

    def _run(command: str, args: Sequence[str], cwd: str | Path | None) -> ProbeResult:
        try:
            result = subprocess.run(
                [command, *args],
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Probe '%s' timed out after %.1fs.", command, timeout)
            return ProbeResult(stdout="", stderr="timed out", status=TIMEOUT_STATUS)
        except FileNotFoundError as error:
            logger.debug("Probe '%s' not found: %s", command, error)
            return ProbeResult(stdout="", stderr=str(error), status=NOT_FOUND_STATUS)
        return ProbeResult(
            stdout=result.stdout, stderr=result.stderr, status=result.returncode
        )

    async def probe(
        command: str,
        args: Sequence[str] = (),
        cwd: str | Path | None = None,
    ) -> ProbeResult:
        logger.debug("Probing: %s %s", command, " ".join(args))
        return await asyncio.to_thread(_run, command, args, cwd)

    return probe
