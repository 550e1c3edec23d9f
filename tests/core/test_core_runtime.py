from __future__ import annotations

import json
import sys
from pathlib import Path

from bltctl.core.context import RunContext
from bltctl.core.process import run_command
from bltctl.core.runtime.logging import log_event


def test_run_command_captures_output(tmp_path: Path) -> None:
    out = run_command([sys.executable, "-c", "import sys; print('hi'); sys.stderr.write('err'); sys.exit(3)"], tmp_path)
    assert out.code == 3
    assert out.stdout == "hi\n"
    assert out.stderr == "err"
    assert out.combined_output == "hi\nerr"
    assert out.ok is False


def test_run_command_passes_output_through_without_capture(tmp_path: Path, capfd) -> None:
    out = run_command([sys.executable, "-c", "import sys; print('live'); sys.exit(5)"], tmp_path, capture=False)
    assert out.code == 5
    assert out.stdout == ""
    assert capfd.readouterr().out == "live\n"


def test_run_command_times_out(tmp_path: Path) -> None:
    out = run_command([sys.executable, "-c", "import time; time.sleep(5)"], tmp_path, timeout_seconds=1)
    assert out.code == 124
    assert "timed out after 1s" in out.stderr


def test_context_resolves_project_root_and_run_id(project_root: Path, monkeypatch) -> None:
    nested = project_root / "docroot" / "modules"
    nested.mkdir(parents=True)
    monkeypatch.setenv("RUN_ID", "ci-42")
    ctx = RunContext.from_args(cwd=nested)
    assert ctx.repo_root == project_root.resolve()
    assert ctx.run_id == "ci-42"
    assert RunContext.from_args(run_id="explicit", cwd=project_root).run_id == "explicit"


def test_log_event_text_and_json(project_root: Path, capsys) -> None:
    text_ctx = RunContext("r1", project_root, verbose=True, quiet=False, log_json=False)
    log_event(text_ctx, "info", "hooks", "command-disabled", command="deploy")
    line = capsys.readouterr().err.strip()
    assert "level=info run_id=r1 component=hooks action=command-disabled" in line
    assert line.endswith("command=deploy")

    json_ctx = RunContext("r2", project_root, verbose=False, quiet=False, log_json=True)
    log_event(json_ctx, "warn", "inspector", "environment-warning", message="git missing")
    payload = json.loads(capsys.readouterr().err)
    assert payload["run_id"] == "r2"
    assert payload["message"] == "git missing"
    assert payload["ts"].endswith("Z")


def test_log_event_respects_verbosity(project_root: Path, capsys) -> None:
    default_ctx = RunContext("r", project_root, verbose=False, quiet=False, log_json=False)
    quiet_ctx = RunContext("r", project_root, verbose=False, quiet=True, log_json=False)
    log_event(default_ctx, "info", "c", "a")
    log_event(quiet_ctx, "warn", "c", "a")
    assert capsys.readouterr().err == ""
    log_event(quiet_ctx, "error", "c", "a")
    assert "level=error" in capsys.readouterr().err
