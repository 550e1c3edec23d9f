from .executor import VmExecutor

__all__ = ["VmExecutor"]
