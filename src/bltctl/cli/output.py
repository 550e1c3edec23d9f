"""CLI payload output helpers."""

from __future__ import annotations

from ..core.errors import ScriptError
from ..core.serialize import dumps_json


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def render_error(exc: ScriptError, *, as_json: bool) -> str:
    if as_json:
        return dumps_json(
            {
                "schema_version": 1,
                "tool": "bltctl",
                "status": "error",
                "errors": [exc.to_payload()],
            },
            pretty=False,
        )
    return f"bltctl: {exc.message}"
