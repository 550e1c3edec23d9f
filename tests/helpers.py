from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from bltctl.console.application import GLOBAL_DEFINITION
from bltctl.console.command import AnnotatedCommand, PlainCommand
from bltctl.console.definition import InputArgument, InputDefinition, InputOption
from bltctl.console.event import CommandEvent
from bltctl.console.input import CommandInput
from bltctl.core.context import RunContext
from bltctl.core.process import CommandResult
from bltctl.hooks.command_event import EXECUTE_IN_VM_ANNOTATION


def make_ctx(root: Path, quiet: bool = True) -> RunContext:
    return RunContext(run_id="pytest-run", repo_root=root, verbose=False, quiet=quiet, log_json=False)


def result(code: int = 0, stdout: str = "", stderr: str = "") -> CommandResult:
    return CommandResult(code=code, stdout=stdout, stderr=stderr, duration_ms=0)


class FakeInspector:
    def __init__(self, vm_cli: bool = False, initialized: bool = True, booted: bool = True) -> None:
        self.vm_cli = vm_cli
        self.initialized = initialized
        self.booted = booted
        self.calls: list[str] = []

    def is_vm_cli(self) -> bool:
        self.calls.append("is_vm_cli")
        return self.vm_cli

    def is_drupal_vm_locally_initialized(self) -> bool:
        self.calls.append("is_drupal_vm_locally_initialized")
        return self.initialized

    def is_drupal_vm_booted(self) -> bool:
        self.calls.append("is_drupal_vm_booted")
        return self.booted

    def issue_environment_warnings(self) -> list[str]:
        self.calls.append("issue_environment_warnings")
        return []


class FakeVm:
    def __init__(self, code: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.commands: list[str] = []
        self._result = result(code, stdout, stderr)

    def execute(self, command_string: str) -> CommandResult:
        self.commands.append(command_string)
        return self._result


class FakeRunner:
    """Answers subprocess calls by matching the longest registered argv prefix."""

    def __init__(self, responses: dict[tuple[str, ...], CommandResult] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []
        self.captured: list[bool] = []

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        timeout_seconds: int = 0,
        ctx: RunContext | None = None,
        capture: bool = True,
    ) -> CommandResult:
        self.calls.append(list(cmd))
        self.captured.append(capture)
        matches = [key for key in self.responses if tuple(cmd[: len(key)]) == key]
        if not matches:
            return result(127, stderr=f"unexpected command: {' '.join(cmd)}")
        return self.responses[max(matches, key=len)]


def which_from(available: set[str]) -> Callable[[str], str | None]:
    def _which(name: str) -> str | None:
        return f"/usr/bin/{name}" if name in available else None

    return _which


SAMPLE_DEFINITION = InputDefinition(
    arguments=(InputArgument("target"), InputArgument("extra")),
    options=(
        InputOption("environment", accept_value=True),
        InputOption("dry-run"),
    ),
).merge(GLOBAL_DEFINITION)


def vm_command(name: str = "tests:phpunit", definition: InputDefinition = SAMPLE_DEFINITION) -> AnnotatedCommand:
    return AnnotatedCommand(name, definition, handler=lambda _input: 0, annotations={EXECUTE_IN_VM_ANNOTATION: ""})


def plain_command(name: str = "tests:phpunit", definition: InputDefinition = SAMPLE_DEFINITION) -> PlainCommand:
    return PlainCommand(name, definition, handler=lambda _input: 0)


def make_event(command: PlainCommand, arguments: dict | None = None, options: dict | None = None) -> CommandEvent:
    args = {"command": command.name, **(arguments or {})}
    return CommandEvent(command, CommandInput(command.definition, args, options or {}))
