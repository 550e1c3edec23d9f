from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .runtime.logging import log_event

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


class Runner(Protocol):
    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        timeout_seconds: int = 0,
        ctx: RunContext | None = None,
        capture: bool = True,
    ) -> CommandResult: ...


def run_command(
    cmd: list[str],
    cwd: Path,
    timeout_seconds: int = 0,
    ctx: RunContext | None = None,
    capture: bool = True,
) -> CommandResult:
    """Run `cmd` in `cwd`.

    With `capture=False` the child inherits stdout and stderr, so its output
    reaches the terminal as it runs and the result carries only the exit code.
    """
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            text=True,
            capture_output=capture,
            check=False,
            timeout=(timeout_seconds if timeout_seconds > 0 else None),
        )
        result = CommandResult(
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    except subprocess.TimeoutExpired as exc:
        result = CommandResult(
            code=124,
            stdout=(exc.stdout or "") if isinstance(exc.stdout, str) else "",
            stderr=(((exc.stderr or "") if isinstance(exc.stderr, str) else "") + f"\ncommand timed out after {timeout_seconds}s").strip(),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    if ctx is not None:
        log_event(
            ctx,
            "debug",
            "process",
            "run-command",
            command=" ".join(cmd),
            cwd=str(cwd),
            code=result.code,
            duration_ms=result.duration_ms,
        )
    return result


__all__ = ["CommandResult", "Runner", "run_command"]
