"""Dispatch assembled invocations to the backend process.

By default the command string is handed to the system shell, as ``system()``
would; values containing shell metacharacters are interpreted by the shell.
With ``shell=False`` the string is split with :func:`shlex.split` and the
backend is executed directly.  The backend inherits this process's stdout
and stderr, and its exit status is reported but never aggregated.
"""

import shlex
import subprocess
from dataclasses import dataclass

from ccgen.assembler import Invocation

# Exit status a POSIX shell uses for "command not found"
NOT_FOUND_STATUS = 127


@dataclass
class BackendResult:
    """Outcome of one backend run."""

    returncode: int
    error_msg: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def command_argv(invocation: Invocation) -> list[str]:
    """Split the command string into an argv list for shell-less execution."""
    try:
        return shlex.split(invocation.command)
    except ValueError:
        return invocation.command.split()


def run_command(invocation: Invocation, *, shell: bool = True) -> BackendResult:
    """Run *invocation* to completion and return its exit status."""
    try:
        if shell:
            r = subprocess.run(invocation.command, shell=True, check=False)
        else:
            r = subprocess.run(command_argv(invocation), check=False)
    except FileNotFoundError as e:
        return BackendResult(NOT_FOUND_STATUS, f"Backend not found: {e}")
    except OSError as e:
        return BackendResult(NOT_FOUND_STATUS, f"Failed to run backend: {e}")
    return BackendResult(r.returncode)
