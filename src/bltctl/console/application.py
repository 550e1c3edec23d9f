from __future__ import annotations

import dataclasses
import sys
from collections.abc import Callable, Mapping, Sequence

from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE, RETURN_CODE_DISABLED
from ..core.runtime.logging import log_event
from ..hooks.dispatcher import HookDispatcher
from .command import AnnotatedCommand, CommandHandler, PlainCommand
from .definition import InputArgument, InputDefinition, InputOption
from .event import CommandEvent
from .input import CommandInput

GLOBAL_DEFINITION = InputDefinition(
    arguments=(InputArgument("command", required=True, description="the command to execute"),),
    options=(
        InputOption("verbose", shortcut="v", description="increase command verbosity"),
        InputOption("yes", shortcut="y", description="answer yes to all confirmation prompts"),
        InputOption("execute-on-host", description="run VM-eligible commands on the host"),
        InputOption("define", shortcut="D", accept_value=True, is_array=True, description="override a config value, key=value"),
    ),
)


def first_argument(argv: Sequence[str], definition: InputDefinition = GLOBAL_DEFINITION) -> str | None:
    value_options = {f"--{opt.name}" for opt in definition.options if opt.accept_value}
    value_options.update(f"-{opt.shortcut}" for opt in definition.options if opt.accept_value and opt.shortcut)
    skip = False
    for token in argv:
        if skip:
            skip = False
            continue
        if token.startswith("-") and len(token) > 1:
            skip = token in value_options
            continue
        return token
    return None


class Application:
    def __init__(self, ctx: RunContext, dispatcher: HookDispatcher, name: str = "bltctl") -> None:
        self.ctx = ctx
        self.dispatcher = dispatcher
        self.name = name
        self._commands: dict[str, PlainCommand] = {}

    def add(self, command: PlainCommand) -> PlainCommand:
        merged = dataclasses.replace(command, definition=command.definition.merge(GLOBAL_DEFINITION))
        self._commands[command.name] = merged
        return merged

    def command(
        self,
        name: str,
        *,
        arguments: Sequence[InputArgument] = (),
        options: Sequence[InputOption] = (),
        annotations: Mapping[str, str] | None = None,
        description: str = "",
    ) -> Callable[[CommandHandler], CommandHandler]:
        definition = InputDefinition(arguments=tuple(arguments), options=tuple(options))

        def _register(handler: CommandHandler) -> CommandHandler:
            if annotations:
                self.add(AnnotatedCommand(name, definition, handler, description, annotations=dict(annotations)))
            else:
                self.add(PlainCommand(name, definition, handler, description))
            return handler

        return _register

    def find(self, name: str) -> PlainCommand:
        try:
            return self._commands[name]
        except KeyError:
            raise ScriptError(f"command `{name}` is not defined", ERR_USAGE, kind="usage_error") from None

    def all(self) -> tuple[PlainCommand, ...]:
        return tuple(self._commands[name] for name in sorted(self._commands))

    def run(self, argv: Sequence[str]) -> int:
        name = first_argument(argv)
        if name is None:
            raise ScriptError(f"usage: {self.name} <command> [options] [arguments]", ERR_USAGE, kind="usage_error")
        command = self.find(name)
        command_input = CommandInput.parse(command.definition, argv, prog=self.name)
        event = CommandEvent(command, command_input)
        results = self.dispatcher.dispatch(event)
        if event.command_should_run():
            log_event(self.ctx, "debug", "application", "run", command=name)
            return command.run(command_input)
        if not results:
            log_event(self.ctx, "info", "application", "skipped", command=name, code=RETURN_CODE_DISABLED)
            return RETURN_CODE_DISABLED
        # A hook ran the command elsewhere; its outcome stands for this run.
        result = results[-1]
        if result.stdout:
            sys.stdout.write(result.stdout)
        if result.stderr:
            sys.stderr.write(result.stderr)
        return result.code


__all__ = ["Application", "GLOBAL_DEFINITION", "first_argument"]
