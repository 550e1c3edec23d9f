from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_VALIDATION

PROJECT_CONFIG = Path("blt/blt.yml")
LOCAL_CONFIG = Path("blt/local.blt.yml")
CONFIG_SCHEMA = Path(__file__).resolve().parent / "schemas" / "config.schema.json"

DEFAULTS: dict[str, Any] = {
    "vm": {"enable": False, "config": "box/config.yml", "exec-plugin": "vagrant-exec"},
    "disable-targets": {},
}

_MISSING = object()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid YAML in {path}: {exc}", ERR_CONFIG, kind="config_error") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ScriptError(f"{path} must contain a mapping at the top level", ERR_CONFIG, kind="config_error")
    return payload


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    out = copy.deepcopy(dict(base))
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = deep_merge(out[key], value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def parse_define(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ScriptError(f"invalid --define `{raw}`; expected key=value", ERR_CONFIG, kind="config_error")
    try:
        parsed = yaml.safe_load(value) if value else ""
    except yaml.YAMLError:
        parsed = value
    if isinstance(parsed, (dict, list)):
        parsed = value
    return key, parsed


def validate_config(payload: Mapping[str, Any], schema_path: Path = CONFIG_SCHEMA) -> None:
    schema = json.loads(schema_path.read_text(encoding="utf-8"))
    try:
        jsonschema.validate(dict(payload), schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(f"config validation failed at {loc}: {exc.message}", ERR_VALIDATION, kind="config_error") from exc


def _flatten_targets(node: Any, prefix: tuple[str, ...]) -> Iterator[str]:
    if isinstance(node, Mapping):
        for key, value in node.items():
            yield from _flatten_targets(value, prefix + (str(key),))
    elif node and prefix:
        yield ":".join(prefix)


class Config:
    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = deep_merge(DEFAULTS, data or {})

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def has(self, key: str) -> bool:
        return self._lookup(key) is not _MISSING

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is _MISSING else value

    def set(self, key: str, value: Any) -> None:
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def disabled_commands(self) -> frozenset[str]:
        targets = self.get("disable-targets")
        if isinstance(targets, list):
            return frozenset(str(name) for name in targets)
        return frozenset(_flatten_targets(targets, ()))

    def is_command_disabled(self, name: str) -> bool:
        return name in self.disabled_commands()


def load_config(repo_root: Path, defines: Iterable[str] = (), validate: bool = True) -> Config:
    data: dict[str, Any] = {}
    for rel in (PROJECT_CONFIG, LOCAL_CONFIG):
        path = repo_root / rel
        if path.is_file():
            data = deep_merge(data, _read_yaml(path))
    config = Config(data)
    config.set("repo.root", str(repo_root))
    for raw in defines:
        key, value = parse_define(raw)
        config.set(key, value)
    if validate:
        validate_config(config.to_dict())
    return config


__all__ = ["CONFIG_SCHEMA", "Config", "LOCAL_CONFIG", "PROJECT_CONFIG", "deep_merge", "load_config", "parse_define", "validate_config"]
