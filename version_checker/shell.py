from __future__ import annotations

import contextlib
import logging
import os
import signal
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Sequence


log = logging.getLogger("version_checker.shell")


class CommandError(RuntimeError):
    def __init__(self, message: str, *, exit_code: int | None = None, output: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.output = output


@dataclass(frozen=True)
class Command:
    command: str
    args: Sequence[str] = ()
    working_dir: str | Path = "."
    env: Mapping[str, str] = field(default_factory=dict)
    timeout_sec: int = 60
    max_output_chars: int = 0

    def argv(self) -> list[str]:
        return [self.command, *self.args]


@dataclass
class CommandResult:
    exit_code: int
    output: str
    duration_ms: int
    output_truncated: bool = False
    timed_out: bool = False


def _truncate(text: str, limit: int) -> tuple[str, bool]:
    if limit <= 0 or len(text) <= limit:
        return text, False
    return text[:limit] + f"\n[truncated: output exceeded {limit} chars]\n", True


def _terminate_process_group(proc: subprocess.Popen, *, grace_sec: int = 2) -> None:
    if proc.poll() is not None:
        return

    try:
        os.killpg(proc.pid, signal.SIGTERM)
    except Exception:
        with contextlib.suppress(ProcessLookupError):
            proc.terminate()

    try:
        proc.wait(timeout=grace_sec)
        return
    except subprocess.TimeoutExpired:
        pass

    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except Exception:
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
    proc.wait()


def run_command(cmd: Command) -> CommandResult:
    """Run cmd to completion and capture stdout and stderr interleaved.

    - No shell is involved; arguments are passed as a list.
    - The child inherits os.environ with cmd.env overlaid on top.
    - On timeout the whole process group is terminated.

    Raises OSError (FileNotFoundError, NotADirectoryError, ...) when the
    process cannot be spawned.
    """
    env = dict(os.environ)
    env.update(cmd.env)
    log.info(
        "Running command: %s (cwd=%s, env overrides: %s)",
        " ".join(cmd.argv()),
        cmd.working_dir,
        ",".join(sorted(cmd.env.keys())) or "-",
    )

    start = time.time()
    proc = subprocess.Popen(
        cmd.argv(),
        cwd=str(cmd.working_dir),
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        stdin=subprocess.DEVNULL,
        start_new_session=True,
    )

    timed_out = False
    try:
        raw, _ = proc.communicate(timeout=cmd.timeout_sec)
    except subprocess.TimeoutExpired:
        timed_out = True
        _terminate_process_group(proc, grace_sec=2)
        raw, _ = proc.communicate()
    finally:
        if proc.poll() is None:
            _terminate_process_group(proc, grace_sec=2)

    output, truncated = _truncate((raw or b"").decode(errors="replace"), cmd.max_output_chars)
    duration_ms = int((time.time() - start) * 1000)
    return CommandResult(
        exit_code=-1 if proc.returncode is None else int(proc.returncode),
        output=output,
        duration_ms=duration_ms,
        output_truncated=truncated,
        timed_out=timed_out,
    )


def run_command_and_get_output(cmd: Command) -> str:
    """Run cmd and return its combined output, raising CommandError on any failure."""
    try:
        result = run_command(cmd)
    except OSError as e:
        raise CommandError(f"failed to start {cmd.command}: {e}") from e

    if result.timed_out:
        raise CommandError(
            f"{cmd.command} timed out after {cmd.timeout_sec}s",
            exit_code=result.exit_code,
            output=result.output,
        )
    if result.exit_code != 0:
        raise CommandError(
            f"{cmd.command} exited with code {result.exit_code}",
            exit_code=result.exit_code,
            output=result.output,
        )
    return result.output
