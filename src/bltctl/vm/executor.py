from __future__ import annotations

from pathlib import Path

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_GENERIC
from ..core.process import CommandResult, Runner, run_command
from ..core.runtime.logging import log_event

DEFAULT_EXEC_PLUGIN = "vagrant-exec"


class VmExecutor:
    """Runs a command line inside Drupal VM through `vagrant exec`."""

    def __init__(
        self,
        ctx: RunContext,
        repo_root: Path,
        runner: Runner = run_command,
        plugin: str = DEFAULT_EXEC_PLUGIN,
        timeout_seconds: int = 0,
    ) -> None:
        self.ctx = ctx
        self.repo_root = repo_root
        self.plugin = plugin
        self.timeout_seconds = timeout_seconds
        self._runner = runner
        self._plugin_ready = False

    def ensure_plugin(self) -> None:
        if self._plugin_ready:
            return
        listed = self._runner(["vagrant", "plugin", "list"], self.repo_root, ctx=self.ctx)
        if listed.code != 0:
            raise ScriptError(f"unable to list vagrant plugins: {listed.combined_output}", ERR_GENERIC, kind="vm_error")
        installed = {line.split()[0] for line in listed.stdout.splitlines() if line.strip()}
        if self.plugin not in installed:
            log_event(self.ctx, "info", "vm", "install-plugin", plugin=self.plugin)
            result = self._runner(["vagrant", "plugin", "install", self.plugin], self.repo_root, ctx=self.ctx)
            if result.code != 0:
                raise ScriptError(
                    f"unable to install vagrant plugin `{self.plugin}`: {result.combined_output}",
                    ERR_GENERIC,
                    kind="vm_error",
                )
        self._plugin_ready = True

    def execute(self, command_string: str) -> CommandResult:
        self.ensure_plugin()
        log_event(self.ctx, "info", "vm", "execute", command=command_string)
        return self._runner(
            ["vagrant", "exec", command_string],
            self.repo_root,
            timeout_seconds=self.timeout_seconds,
            ctx=self.ctx,
            capture=False,
        )


__all__ = ["DEFAULT_EXEC_PLUGIN", "VmExecutor"]
