from __future__ import annotations

from collections.abc import Callable

from ..console.event import CommandEvent
from ..core.process import CommandResult

CommandEventHandler = Callable[[CommandEvent], "CommandResult | None"]


class HookDispatcher:
    """Ordered list of command-event handlers.

    Every handler sees every event, in registration order, even after an
    earlier one disabled the command.
    """

    def __init__(self) -> None:
        self._handlers: list[CommandEventHandler] = []

    @property
    def handlers(self) -> tuple[CommandEventHandler, ...]:
        return tuple(self._handlers)

    def register(self, handler: CommandEventHandler) -> CommandEventHandler:
        self._handlers.append(handler)
        return handler

    def dispatch(self, event: CommandEvent) -> list[CommandResult]:
        results: list[CommandResult] = []
        for handler in self._handlers:
            result = handler(event)
            if result is not None:
                results.append(result)
        return results


__all__ = ["CommandEventHandler", "HookDispatcher"]
