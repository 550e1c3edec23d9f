from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .. import __version__
from ..config import load_config
from ..console.application import GLOBAL_DEFINITION, Application
from ..core.context import RunContext
from ..core.errors import ScriptError
from ..core.process import Runner, run_command
from ..environment.inspector import Inspector
from ..hooks.command_event import CommandEventHook
from ..hooks.dispatcher import HookDispatcher
from ..vm.executor import DEFAULT_EXEC_PLUGIN, VmExecutor
from .commands import register_builtin_commands
from .output import render_error


def _version_string() -> str:
    return f"bltctl {__version__}"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bltctl", description="build orchestration with Drupal VM aware command hooks")
    p.add_argument("--version", action="version", version=_version_string())
    p.add_argument("--cwd", help="run against an explicit project root")
    p.add_argument("--run-id", help="run identifier used in log events")
    p.add_argument("--log-json", action="store_true", help="emit log events and errors as JSON")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", "-v", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    for opt in GLOBAL_DEFINITION.options:
        if opt.name == "verbose":
            continue
        flags = [f"--{opt.name}"] + ([f"-{opt.shortcut}"] if opt.shortcut else [])
        if opt.is_array:
            p.add_argument(*flags, dest=opt.name, action="append", default=[], help=opt.description)
        else:
            p.add_argument(*flags, dest=opt.name, action="store_true", help=opt.description)
    p.add_argument("rest", nargs=argparse.REMAINDER, help="command, options and arguments")
    return p


def collect_defines(argv: Sequence[str]) -> list[str]:
    define = GLOBAL_DEFINITION.get_option("define")
    long_flag = f"--{define.name}"
    short_flag = f"-{define.shortcut}"
    out: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            break
        if token in (long_flag, short_flag):
            value = next(tokens, None)
            if value is not None:
                out.append(value)
        elif token.startswith(f"{long_flag}="):
            out.append(token[len(long_flag) + 1 :])
        elif token.startswith(short_flag) and len(token) > len(short_flag):
            out.append(token[len(short_flag) :])
    return out


def leading_options(ns: argparse.Namespace) -> list[str]:
    """Turn application options given before the command name back into tokens."""
    values = vars(ns)
    out: list[str] = []
    for opt in GLOBAL_DEFINITION.options:
        value = values.get(opt.name)
        if opt.is_array:
            out.extend(f"--{opt.name}={item}" for item in value or ())
        elif value:
            out.append(f"--{opt.name}")
    return out


def wants_verbose(argv: Sequence[str]) -> bool:
    verbose = GLOBAL_DEFINITION.get_option("verbose")
    flags = {f"--{verbose.name}", f"-{verbose.shortcut}"}
    for token in argv:
        if token == "--":
            return False
        if token in flags:
            return True
    return False


def build_application(ctx: RunContext, defines: Sequence[str] = (), runner: Runner = run_command) -> Application:
    config = load_config(ctx.repo_root, defines)
    inspector = Inspector(config, ctx, runner=runner)
    executor = VmExecutor(
        ctx,
        inspector.repo_root,
        runner=runner,
        plugin=str(config.get("vm.exec-plugin") or DEFAULT_EXEC_PLUGIN),
    )
    dispatcher = CommandEventHook(config, inspector, executor, ctx).register(HookDispatcher())
    app = Application(ctx, dispatcher)
    return register_builtin_commands(app, config, inspector, runner=runner)


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    rest = [*leading_options(ns), *ns.rest] if ns.rest else []
    verbose = ns.verbose or (not ns.quiet and wants_verbose(ns.rest))
    try:
        ctx = RunContext.from_args(ns.run_id, ns.cwd, verbose, ns.quiet, ns.log_json)
        app = build_application(ctx, collect_defines(rest))
        if not rest:
            for command in app.all():
                print(f"{command.name:<14} {command.description}".rstrip())
            return 0
        return app.run(rest)
    except ScriptError as exc:
        print(render_error(exc, as_json=ns.log_json), file=sys.stderr)
        return exc.code


if __name__ == "__main__":
    raise SystemExit(main())
