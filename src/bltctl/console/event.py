from __future__ import annotations

from dataclasses import dataclass

from .command import PlainCommand
from .input import CommandInput


@dataclass
class CommandEvent:
    """Dispatched right before a matched command runs.

    Hooks may only flip `disabled`; the application checks it once after
    every hook has run.
    """

    command: PlainCommand
    input: CommandInput
    disabled: bool = False

    def disable_command(self) -> None:
        self.disabled = True

    def enable_command(self) -> None:
        self.disabled = False

    def command_should_run(self) -> bool:
        return not self.disabled
