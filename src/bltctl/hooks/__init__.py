"""Command-event hooks run right before a matched command executes."""

from .command_event import (
    EXECUTE_IN_VM_ANNOTATION,
    VM_ALIAS_DEFINE,
    CommandEventHook,
    convert_input_to_command_string,
    create_command_input_from_current_params,
)
from .dispatcher import HookDispatcher

__all__ = [
    "CommandEventHook",
    "EXECUTE_IN_VM_ANNOTATION",
    "HookDispatcher",
    "VM_ALIAS_DEFINE",
    "convert_input_to_command_string",
    "create_command_input_from_current_params",
]
