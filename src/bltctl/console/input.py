from __future__ import annotations

import argparse
import shlex
from typing import Any, Sequence

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_USAGE
from .definition import InputDefinition


class _InputParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ScriptError(f"invalid input: {message}", ERR_USAGE, kind="usage_error")


def _build_parser(definition: InputDefinition, prog: str) -> argparse.ArgumentParser:
    p = _InputParser(prog=prog, add_help=False, allow_abbrev=False)
    for arg in definition.arguments:
        if arg.is_array:
            nargs = "+" if arg.required else "*"
        else:
            nargs = None if arg.required else "?"
        p.add_argument(arg.name, nargs=nargs, default=None, help=arg.description)
    for opt in definition.options:
        flags = [f"--{opt.name}"] + ([f"-{opt.shortcut}"] if opt.shortcut else [])
        if opt.is_array:
            p.add_argument(*flags, dest=opt.name, action="append", default=None, help=opt.description)
        elif opt.accept_value:
            p.add_argument(*flags, dest=opt.name, default=None, help=opt.description)
        else:
            p.add_argument(*flags, dest=opt.name, action="store_true", default=None, help=opt.description)
    return p


class CommandInput:
    """Argument and option values of one command invocation."""

    def __init__(
        self,
        definition: InputDefinition,
        arguments: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
        program: str | None = None,
    ) -> None:
        self.definition = definition
        self.program = program
        self._arguments: dict[str, Any] = {}
        self._options: dict[str, Any] = {}
        for name, value in (arguments or {}).items():
            self.set_argument(name, value)
        for name, value in (options or {}).items():
            self.set_option(name, value)

    @classmethod
    def parse(cls, definition: InputDefinition, argv: Sequence[str], prog: str = "blt") -> "CommandInput":
        ns = vars(_build_parser(definition, prog).parse_intermixed_args(list(argv)))
        arguments = {arg.name: ns[arg.name] for arg in definition.arguments if ns.get(arg.name) not in (None, [])}
        options = {opt.name: ns[opt.name] for opt in definition.options if ns.get(opt.name) is not None}
        return cls(definition, arguments, options)

    def get_argument(self, name: str) -> Any:
        arg = self.definition.get_argument(name)
        return self._arguments.get(name, arg.default)

    def set_argument(self, name: str, value: Any) -> None:
        self.definition.get_argument(name)
        self._arguments[name] = value

    def has_argument(self, name: str) -> bool:
        return self.definition.has_argument(name)

    def arguments(self) -> dict[str, Any]:
        return {arg.name: self._arguments.get(arg.name, arg.default) for arg in self.definition.arguments}

    def get_option(self, name: str) -> Any:
        opt = self.definition.get_option(name)
        return self._options[name] if name in self._options else opt.default_value()

    def set_option(self, name: str, value: Any) -> None:
        opt = self.definition.get_option(name)
        if opt.is_array and value is not None:
            value = list(value) if isinstance(value, (list, tuple)) else [value]
        self._options[name] = value

    def has_option(self, name: str) -> bool:
        return self.definition.has_option(name)

    def options(self) -> dict[str, Any]:
        return {opt.name: self.get_option(opt.name) for opt in self.definition.options}

    def tokens(self) -> list[str]:
        out = [self.program] if self.program else []
        for arg in self.definition.arguments:
            if arg.name not in self._arguments:
                continue
            value = self._arguments[arg.name]
            if value is None:
                continue
            if isinstance(value, list):
                out.extend(str(item) for item in value)
            else:
                out.append(str(value))
        return out

    def __str__(self) -> str:
        return " ".join(shlex.quote(token) for token in self.tokens())

    def __repr__(self) -> str:
        return f"CommandInput(arguments={self._arguments!r}, options={self._options!r})"


__all__ = ["CommandInput"]
