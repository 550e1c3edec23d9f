"""Local environment and Drupal VM diagnostics.

One inspector is shared by every hook of a process run, so it remembers
whether warnings were already issued and caches the VM state it probed.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Mapping
from pathlib import Path

from ..config import PROJECT_CONFIG, Config
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_GENERIC
from ..core.process import Runner, run_command
from ..core.runtime.env import current_user
from ..core.runtime.logging import log_event

VM_USER = "vagrant"


def parse_machine_state(output: str) -> str | None:
    # vagrant --machine-readable rows: timestamp,target,type,data...
    for line in output.splitlines():
        parts = line.strip().split(",")
        if len(parts) >= 4 and parts[2] == "state":
            return parts[3]
    return None


class Inspector:
    def __init__(
        self,
        config: Config,
        ctx: RunContext,
        runner: Runner = run_command,
        env: Mapping[str, str] | None = None,
        which: Callable[[str], str | None] | None = None,
    ) -> None:
        self.config = config
        self.ctx = ctx
        self._runner = runner
        self._env = env if env is not None else os.environ
        self._which = which or shutil.which
        self._warned = False
        self._booted: bool | None = None

    @property
    def repo_root(self) -> Path:
        return Path(self.config.get("repo.root") or self.ctx.repo_root)

    @property
    def vm_config_path(self) -> Path:
        return self.repo_root / str(self.config.get("vm.config", "box/config.yml"))

    def is_vm_cli(self) -> bool:
        return current_user(self._env) == VM_USER

    def is_vm_enabled(self) -> bool:
        return bool(self.config.get("vm.enable", False))

    def is_drupal_vm_locally_initialized(self) -> bool:
        return self.is_vm_enabled() and self.vm_config_path.is_file()

    def is_drupal_vm_booted(self) -> bool:
        if self._booted is not None:
            return self._booted
        if self._which("vagrant") is None:
            self._booted = False
            return False
        result = self._runner(["vagrant", "status", "--machine-readable"], self.repo_root, ctx=self.ctx)
        if result.code != 0:
            raise ScriptError(
                f"unable to query Drupal VM status (exit {result.code}): {result.combined_output}",
                ERR_GENERIC,
                kind="vm_error",
            )
        self._booted = parse_machine_state(result.stdout) == "running"
        return self._booted

    def warnings(self) -> list[str]:
        found: list[str] = []
        if not (self.repo_root / PROJECT_CONFIG).is_file():
            found.append(f"{PROJECT_CONFIG} not found in {self.repo_root}; using default configuration")
        if self._which("git") is None:
            found.append("git is not installed or not on PATH")
        if self.is_vm_cli():
            return found
        if self.is_vm_enabled() and not self.vm_config_path.is_file():
            found.append(f"vm.enable is set but {self.vm_config_path} does not exist; Drupal VM is not initialized")
        if self.is_drupal_vm_locally_initialized() and self._which("vagrant") is None:
            found.append("Drupal VM is initialized but vagrant is not installed; commands will run on the host")
        return found

    def issue_environment_warnings(self) -> list[str]:
        if self._warned:
            return []
        self._warned = True
        issued = self.warnings()
        for message in issued:
            log_event(self.ctx, "warn", "inspector", "environment-warning", message=message)
        return issued

    def report(self) -> dict[str, object]:
        initialized = self.is_drupal_vm_locally_initialized()
        return {
            "repo_root": str(self.repo_root),
            "vm": {
                "cli": self.is_vm_cli(),
                "enabled": self.is_vm_enabled(),
                "config": str(self.vm_config_path),
                "initialized": initialized,
                "booted": self.is_drupal_vm_booted() if initialized and not self.is_vm_cli() else False,
            },
            "tools": {name: self._which(name) or "missing" for name in ("git", "vagrant")},
            "warnings": self.warnings(),
        }


__all__ = ["Inspector", "VM_USER", "parse_machine_state"]
