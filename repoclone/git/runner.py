"""
Command execution behind an injectable runner.

Cloners never call ``subprocess`` directly; they go through a
``CommandRunner`` so tests can substitute recorded or scripted behaviour.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Tuple

from repoclone.exceptions import GitNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a finished command.

    Attributes:
        args: The command line that was run
        returncode: Exit status of the process
        output: Combined stdout and stderr
    """

    args: Tuple[str, ...]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Minimal interface for running an external command to completion."""

    def run(
        self, args: Sequence[str], cwd: Optional[Path] = None
    ) -> CommandResult:
        """Run ``args`` and wait for it. Non-zero exits are returned, not raised."""
        ...


class SubprocessRunner:
    """Run commands with ``subprocess.run``, capturing stdout and stderr together.

    Output is decoded as UTF-8; undecodable bytes become U+FFFD.
    """

    def run(
        self, args: Sequence[str], cwd: Optional[Path] = None
    ) -> CommandResult:
        command = tuple(str(arg) for arg in args)
        logger.debug(f"Running `{' '.join(command)}` in {cwd or Path.cwd()}")

        try:
            completed = subprocess.run(
                command,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except FileNotFoundError as e:
            # Also raised for a missing cwd, which is not a missing program
            if e.filename != command[0]:
                raise
            raise GitNotFoundError(command[0]) from e

        return CommandResult(
            args=command,
            returncode=completed.returncode,
            output=completed.stdout or "",
        )
