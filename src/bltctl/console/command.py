"""Command descriptors.

Only `AnnotatedCommand` carries metadata; callers check for it with
`isinstance` instead of probing for attributes.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL
from .definition import InputDefinition

if TYPE_CHECKING:
    from .input import CommandInput

CommandHandler = Callable[["CommandInput"], int]


@dataclass(frozen=True)
class AnnotationData:
    values: Mapping[str, str] = field(default_factory=dict)

    def has(self, key: str) -> bool:
        return key in self.values

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.values.get(key, default)


@dataclass(frozen=True)
class PlainCommand:
    name: str
    definition: InputDefinition = field(default_factory=InputDefinition)
    handler: CommandHandler | None = None
    description: str = ""

    def run(self, command_input: CommandInput) -> int:
        if self.handler is None:
            raise ScriptError(f"command `{self.name}` has no handler", ERR_INTERNAL, kind="internal_error")
        return int(self.handler(command_input) or 0)


@dataclass(frozen=True)
class AnnotatedCommand(PlainCommand):
    annotations: Mapping[str, str] = field(default_factory=dict)

    def annotation_data(self) -> AnnotationData:
        return AnnotationData(dict(self.annotations))


__all__ = ["AnnotatedCommand", "AnnotationData", "CommandHandler", "PlainCommand"]
