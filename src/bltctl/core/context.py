from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .errors import ScriptError
from .exit_codes import ERR_CONFIG
from .repo_root import try_find_repo_root
from .runtime.env import getenv


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    verbose: bool
    quiet: bool
    log_json: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        cwd: str | Path | None = None,
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
    ) -> "RunContext":
        start = Path(cwd) if cwd else None
        repo_root = try_find_repo_root(start)
        if repo_root is None:
            if start is None:
                raise ScriptError("unable to resolve repository root; run from a project or pass --cwd", ERR_CONFIG)
            repo_root = start.resolve()
        default_run = f"blt-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}-{os.getpid()}"
        resolved_run_id = run_id or getenv("RUN_ID", default_run) or default_run
        return cls(
            run_id=resolved_run_id,
            repo_root=repo_root,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
        )
