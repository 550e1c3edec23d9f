"""Minimal command framework the hooks attach to."""

from .command import AnnotatedCommand, AnnotationData, PlainCommand
from .definition import InputArgument, InputDefinition, InputOption
from .event import CommandEvent
from .input import CommandInput

__all__ = [
    "AnnotatedCommand",
    "AnnotationData",
    "CommandEvent",
    "CommandInput",
    "InputArgument",
    "InputDefinition",
    "InputOption",
    "PlainCommand",
]
