"""Built-in commands registered on every application."""

from __future__ import annotations

import shlex
import sys

from ..config import Config
from ..console.application import Application
from ..console.definition import InputArgument, InputOption
from ..console.input import CommandInput
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_USAGE
from ..core.process import Runner, run_command
from ..core.serialize import dumps_json
from ..environment.inspector import Inspector
from ..hooks.command_event import EXECUTE_IN_VM_ANNOTATION
from .output import emit


def register_builtin_commands(app: Application, config: Config, inspector: Inspector, runner: Runner = run_command) -> Application:
    @app.command(
        "doctor",
        options=(InputOption("json", description="emit JSON output"),),
        description="show local environment and Drupal VM diagnostics",
    )
    def doctor(command_input: CommandInput) -> int:
        emit({"schema_version": 1, "tool": "bltctl", "status": "ok", **inspector.report()}, bool(command_input.get_option("json")))
        return 0

    @app.command(
        "config:get",
        arguments=(InputArgument("key", required=True, description="dotted config key"),),
        description="print a configuration value",
    )
    def config_get(command_input: CommandInput) -> int:
        key = str(command_input.get_argument("key"))
        if not config.has(key):
            raise ScriptError(f"config key `{key}` is not set", ERR_CONFIG, kind="config_error")
        value = config.get(key)
        print(dumps_json(value, pretty=True) if isinstance(value, (dict, list)) else value)
        return 0

    @app.command(
        "exec",
        arguments=(InputArgument("cmdline", required=True, description="command line to run, quoted as one argument"),),
        annotations={EXECUTE_IN_VM_ANNOTATION: ""},
        description="run a command line, inside Drupal VM when it is running",
    )
    def exec_command(command_input: CommandInput) -> int:
        argv = shlex.split(str(command_input.get_argument("cmdline")))
        if not argv:
            raise ScriptError("exec requires a non-empty command line", ERR_USAGE, kind="usage_error")
        result = runner(argv, app.ctx.repo_root, ctx=app.ctx)
        if result.stdout:
            sys.stdout.write(result.stdout)
        if result.stderr:
            sys.stderr.write(result.stderr)
        return result.code

    return app


__all__ = ["register_builtin_commands"]
