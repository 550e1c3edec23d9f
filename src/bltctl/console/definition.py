"""Argument and option definitions accepted by a command."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE


@dataclass(frozen=True)
class InputArgument:
    name: str
    required: bool = False
    is_array: bool = False
    default: Any = None
    description: str = ""


@dataclass(frozen=True)
class InputOption:
    name: str
    shortcut: str | None = None
    accept_value: bool = False
    is_array: bool = False
    default: Any = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.is_array and not self.accept_value:
            raise ValueError(f"array option `{self.name}` must accept a value")

    def default_value(self) -> Any:
        if self.is_array:
            return list(self.default or [])
        if not self.accept_value:
            return bool(self.default)
        return self.default


@dataclass(frozen=True)
class InputDefinition:
    arguments: tuple[InputArgument, ...] = ()
    options: tuple[InputOption, ...] = field(default=())

    def has_argument(self, name: str) -> bool:
        return any(arg.name == name for arg in self.arguments)

    def has_option(self, name: str) -> bool:
        return any(opt.name == name for opt in self.options)

    def get_argument(self, name: str) -> InputArgument:
        for arg in self.arguments:
            if arg.name == name:
                return arg
        raise ScriptError(f"the `{name}` argument does not exist", ERR_USAGE, kind="usage_error")

    def get_option(self, name: str) -> InputOption:
        for opt in self.options:
            if opt.name == name:
                return opt
        raise ScriptError(f"the `--{name}` option does not exist", ERR_USAGE, kind="usage_error")

    def merge(self, other: InputDefinition) -> InputDefinition:
        """Return a definition with `other`'s entries added where missing.

        Arguments from `other` go first so a leading `command` argument keeps
        its position; options from `other` go last.
        """
        arguments = tuple(arg for arg in other.arguments if not self.has_argument(arg.name)) + self.arguments
        options = self.options + tuple(opt for opt in other.options if not self.has_option(opt.name))
        return InputDefinition(arguments=arguments, options=options)


__all__ = ["InputArgument", "InputDefinition", "InputOption"]
