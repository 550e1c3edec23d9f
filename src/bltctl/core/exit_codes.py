"""Process exit codes returned by bltctl."""

from __future__ import annotations

ERR_GENERIC = 1
ERR_CONFIG = 2
ERR_VALIDATION = 3
ERR_USAGE = 64
ERR_INTERNAL = 70
# Matches the code host consoles report for a command skipped by a hook.
RETURN_CODE_DISABLED = 113

__all__ = [
    "ERR_CONFIG",
    "ERR_GENERIC",
    "ERR_INTERNAL",
    "ERR_USAGE",
    "ERR_VALIDATION",
    "RETURN_CODE_DISABLED",
]
