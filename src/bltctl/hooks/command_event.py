"""Hooks for the command event: disable targets, environment warnings and
Drupal VM redirection.

A command annotated with `executeInDrupalVm` is re-run inside the VM when
the VM is initialized and running and we are not already inside it. The
host run is disabled and an equivalent command line is rebuilt from the
current input, with `--define=drush.alias=self` appended so drush targets
the VM's own site alias.
"""

from __future__ import annotations

import shlex
from typing import Protocol

from ..console.command import AnnotatedCommand, PlainCommand
from ..console.definition import InputArgument, InputDefinition, InputOption
from ..console.event import CommandEvent
from ..console.input import CommandInput
from ..core.context import RunContext
from ..core.process import CommandResult
from ..core.runtime.logging import log_event
from .dispatcher import HookDispatcher

BASE_TOKEN = "bltctl"
EXECUTE_IN_VM_ANNOTATION = "executeInDrupalVm"
EXECUTE_ON_HOST_OPTION = "execute-on-host"
VM_ALIAS_DEFINE = "drush.alias=self"

# Entries every rebuilt input needs, whatever the command declares.
VM_INPUT_DEFINITION = InputDefinition(
    arguments=(InputArgument("command", required=True),),
    options=(InputOption("define", shortcut="D", accept_value=True, is_array=True),),
)


class DisabledTargets(Protocol):
    def is_command_disabled(self, name: str) -> bool: ...


class EnvironmentInspector(Protocol):
    def is_vm_cli(self) -> bool: ...

    def is_drupal_vm_locally_initialized(self) -> bool: ...

    def is_drupal_vm_booted(self) -> bool: ...

    def issue_environment_warnings(self) -> object: ...


class VmBackend(Protocol):
    def execute(self, command_string: str) -> CommandResult: ...


def create_command_input_from_current_params(
    command: PlainCommand,
    command_input: CommandInput,
    program: str = BASE_TOKEN,
) -> CommandInput:
    definition = command.definition
    args = {
        name: value
        for name, value in command_input.arguments().items()
        if name != "command" and value is not None and definition.has_argument(name)
    }
    new_input = CommandInput(
        definition.merge(VM_INPUT_DEFINITION),
        {"command": command.name, **args},
        program=program,
    )
    for name, value in command_input.options().items():
        if definition.has_option(name):
            new_input.set_option(name, value)
    return new_input


def _render_option(option: InputOption, value: object) -> list[str]:
    if not option.accept_value or value is True:
        return [f"--{option.name}"]
    values = value if isinstance(value, (list, tuple)) else [value]
    return [f"--{option.name}={shlex.quote(str(item))}" for item in values]


def convert_input_to_command_string(new_input: CommandInput, command: PlainCommand) -> str:
    definition = command.definition.merge(VM_INPUT_DEFINITION)
    parts = [str(new_input)]
    for name, value in new_input.options().items():
        if not value:
            continue
        parts.extend(_render_option(definition.get_option(name), value))
    return " ".join(parts)


class CommandEventHook:
    def __init__(
        self,
        config: DisabledTargets,
        inspector: EnvironmentInspector,
        vm_backend: VmBackend,
        ctx: RunContext,
        program: str = BASE_TOKEN,
    ) -> None:
        self.config = config
        self.inspector = inspector
        self.vm_backend = vm_backend
        self.ctx = ctx
        self.program = program

    def register(self, dispatcher: HookDispatcher) -> HookDispatcher:
        dispatcher.register(self.skip_disabled_commands)
        dispatcher.register(self.issue_warnings)
        dispatcher.register(self.execute_in_drupal_vm)
        return dispatcher

    def skip_disabled_commands(self, event: CommandEvent) -> None:
        """Disable any command listed under `disable-targets`."""
        name = event.command.name
        if self.config.is_command_disabled(name):
            log_event(self.ctx, "info", "hooks", "command-disabled", command=name)
            event.disable_command()

    def issue_warnings(self, event: CommandEvent) -> None:
        # The inspector remembers whether it already warned during this run.
        self.inspector.issue_environment_warnings()

    def should_execute_in_drupal_vm(self) -> bool:
        return (
            not self.inspector.is_vm_cli()
            and self.inspector.is_drupal_vm_locally_initialized()
            and self.inspector.is_drupal_vm_booted()
        )

    def execute_in_drupal_vm(self, event: CommandEvent) -> CommandResult | None:
        command = event.command
        if event.disabled or not isinstance(command, AnnotatedCommand):
            return None
        if not command.annotation_data().has(EXECUTE_IN_VM_ANNOTATION):
            return None
        if event.input.has_option(EXECUTE_ON_HOST_OPTION) and event.input.get_option(EXECUTE_ON_HOST_OPTION):
            return None
        if not self.should_execute_in_drupal_vm():
            return None
        event.disable_command()
        new_input = create_command_input_from_current_params(command, event.input, program=self.program)
        defines = list(new_input.get_option("define") or [])
        defines.append(VM_ALIAS_DEFINE)
        new_input.set_option("define", defines)
        command_string = convert_input_to_command_string(new_input, command)
        log_event(self.ctx, "info", "hooks", "execute-in-vm", command=command.name, command_string=command_string)
        return self.vm_backend.execute(command_string)


__all__ = [
    "BASE_TOKEN",
    "CommandEventHook",
    "EXECUTE_IN_VM_ANNOTATION",
    "EXECUTE_ON_HOST_OPTION",
    "VM_ALIAS_DEFINE",
    "VM_INPUT_DEFINITION",
    "convert_input_to_command_string",
    "create_command_input_from_current_params",
]
