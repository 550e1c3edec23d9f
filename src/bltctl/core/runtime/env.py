"""Centralized environment variable helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping


def getenv(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def current_user(env: Mapping[str, str] | None = None) -> str | None:
    source = os.environ if env is None else env
    return source.get("USER") or source.get("LOGNAME")
