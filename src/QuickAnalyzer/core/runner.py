# -*- coding: utf-8 -*-

"""

@author: Will D

"""

# This is the runner module. This module will allow the application to:

# 1. Run an external command (npm, npx, ...) with a timeout

# 2. Capture its output instead of streaming it to the terminal

# 3. Hand back a CommandResult instead of raising, so checks can just branch

from __future__ import annotations

import enum
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence, Tuple

###########################################################################

"""

Name: CommandStatus

Function: What happened when we tried to run a command. COMPLETED means the

process exited (with any exit code), MISSING means we couldn't even start it,

TIMEOUT means it ran too long and got killed.

Arguments: None (it's an enum)

Returns: No value returned

"""

class CommandStatus(enum.Enum):
    COMPLETED = "completed"
    MISSING = "missing"
    TIMEOUT = "timeout"

#$ End CommandStatus

###########################################################################

"""

Name: CommandResult

Function: Everything we know about one command invocation: the argv, how it

ended, the exit code and the captured output.

Arguments: None (it's a dataclass, so it's just fields)

Returns: No value returned (it's a class definition)

"""

@dataclass(frozen=True)
class CommandResult:
    ### The argv we tried to run
    command: Tuple[str, ...]
    ### How it ended
    status: CommandStatus
    ### Exit code (None if the process never finished)
    returncode: int | None = None
    ### Captured standard output
    stdout: str = ""
    ### Captured standard error
    stderr: str = ""
    ### Why it didn't complete (empty for COMPLETED)
    reason: str = ""

    @property
    def ran(self) -> bool:
        return self.status is CommandStatus.COMPLETED

    @property
    def ok(self) -> bool:
        return self.ran and self.returncode == 0

    @property
    def failed(self) -> bool:
        return self.ran and self.returncode != 0

    @property
    def output(self) -> str:
        return self.stdout + self.stderr

    @property
    def display(self) -> str:
        return " ".join(self.command)

#$ End CommandResult

###########################################################################

"""

Name: run_command

Function: Run an external command in the project directory and wait for it.

Missing executables and timeouts come back as CommandResult values, never as

exceptions, so a flaky toolchain can't take the whole analysis down.

Arguments: command - argv list (first item is looked up on PATH)

            cwd - directory to run the command in

            timeout - seconds before we give up and kill it

Returns: CommandResult describing what happened

"""

def run_command(command: Sequence[str], cwd: Path, timeout: float) -> CommandResult:
    argv = tuple(command)
    if not argv:
        return CommandResult(argv, CommandStatus.MISSING, reason="empty command")
    ### Resolve the executable first (also finds npm.cmd and friends on Windows)
    executable = shutil.which(argv[0])
    if executable is None:
        return CommandResult(argv, CommandStatus.MISSING, reason=f"{argv[0]} not found on PATH")
    try:
        completed = subprocess.run(
            [executable, *argv[1:]],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            ### Tool output is not guaranteed to be valid UTF-8
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(argv, CommandStatus.TIMEOUT, reason=f"timed out after {timeout:g}s")
    except (subprocess.SubprocessError, OSError) as exc:
        return CommandResult(argv, CommandStatus.MISSING, reason=str(exc))
    return CommandResult(
        argv,
        CommandStatus.COMPLETED,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )

#$ End run_command
