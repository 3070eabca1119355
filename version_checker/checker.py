from __future__ import annotations

import logging
from typing import Iterable, NoReturn, Protocol

from version_checker.config import Settings
from version_checker.errors import (
    ExecutionFailedError,
    ExtractionFailedError,
    NoVersionFoundError,
    UnsupportedBinaryError,
    VersionCheckError,
    VersionTooLowError,
)
from version_checker.models import CheckReport, ErrorInfo
from version_checker.params import BinaryKind, CheckVersionParams, validate_params
from version_checker import shell
from version_checker.versions import check_minimum_version, extract_version


log = logging.getLogger("version_checker.checker")

# Default arg passed to a binary to get its version output.
DEFAULT_VERSION_ARG = "--version"

BINARY_EXECUTABLES: dict[BinaryKind, str] = {
    BinaryKind.DOCKER: "docker",
    BinaryKind.TERRAFORM: "terraform",
    BinaryKind.PACKER: "packer",
}


class TestingT(Protocol):
    """Anything that can fail the enclosing test, e.g. unittest.TestCase."""

    def fail(self, msg: str) -> NoReturn: ...


def _binary_name(binary: BinaryKind) -> str:
    name = BINARY_EXECUTABLES.get(binary)
    if name is None:
        raise UnsupportedBinaryError(f"unsupported binary for checking versions {{{binary!r}}}")
    return name


def get_version_with_shell_command(
    params: CheckVersionParams,
    *,
    settings: Settings | None = None,
) -> str:
    """Run `<binary> --version` in params.working_dir and extract the version."""
    settings = settings or Settings.load()
    binary = params.binary if isinstance(params.binary, BinaryKind) else validate_params(params)
    binary_name = _binary_name(binary)
    version_arg = DEFAULT_VERSION_ARG

    cmd = shell.Command(
        command=binary_name,
        args=[version_arg],
        working_dir=params.working_dir,
        env={},
        timeout_sec=settings.command_timeout_sec,
        max_output_chars=settings.max_output_chars,
    )
    try:
        output = shell.run_command_and_get_output(cmd)
    except shell.CommandError as e:
        raise ExecutionFailedError(
            f"failed to run shell command for binary {{{binary_name}}} w/ version args {{{version_arg}}}: {e}",
            binary=binary_name,
            version_arg=version_arg,
        ) from e

    try:
        version = extract_version(output)
    except NoVersionFoundError as e:
        raise ExtractionFailedError(
            f"failed to extract version from shell command output {{{output}}}: {e}",
            output=output,
        ) from e

    log.debug("Extracted version %s", version, extra={"binary": binary_name, "actual_version": version})
    return version


def check_version_e(params: CheckVersionParams, *, settings: Settings | None = None) -> str:
    """Check that the binary's version is >= params.minimum_version.

    Returns the installed version. Raises the first VersionCheckError hit by
    validation, execution, extraction or comparison.
    """
    binary = validate_params(params)
    resolved = CheckVersionParams(
        binary=binary,
        minimum_version=params.minimum_version,
        working_dir=params.working_dir,
    )
    actual_version = get_version_with_shell_command(resolved, settings=settings)
    try:
        check_minimum_version(actual_version, params.minimum_version)
    except VersionTooLowError as e:
        log.warning(
            "%s",
            e,
            extra={
                "binary": binary.value,
                "actual_version": actual_version,
                "minimum_version": params.minimum_version,
                "code": e.code,
            },
        )
        raise
    return actual_version


def check_version(
    t: TestingT | None,
    params: CheckVersionParams,
    *,
    settings: Settings | None = None,
) -> str:
    """Like check_version_e, but fail the enclosing test instead of raising.

    With t=None an AssertionError is raised, which any test runner reports
    as a failure.
    """
    try:
        return check_version_e(params, settings=settings)
    except VersionCheckError as e:
        if t is None:
            raise AssertionError(str(e)) from e
        t.fail(str(e))
        # fail() is expected to raise; never report a failed check as passed
        raise AssertionError(str(e)) from e


def _report_for(params: CheckVersionParams, settings: Settings) -> CheckReport:
    binary = params.binary.value if isinstance(params.binary, BinaryKind) else str(params.binary or "")
    base = {
        "binary": binary,
        "minimum_version": params.minimum_version,
        "working_dir": str(params.working_dir),
    }
    try:
        actual_version = check_version_e(params, settings=settings)
    except VersionCheckError as e:
        details: dict[str, object] = {}
        if isinstance(e, VersionTooLowError):
            details["actual_version"] = e.actual_version
        if isinstance(e, ExtractionFailedError):
            details["output"] = e.output
        return CheckReport(
            **base,
            status="failed",
            actual_version=details.get("actual_version"),
            error=ErrorInfo(code=e.code, message=str(e), details=details),
        )
    return CheckReport(**base, status="passed", actual_version=actual_version)


def run_checks(
    checks: Iterable[CheckVersionParams],
    *,
    settings: Settings | None = None,
) -> list[CheckReport]:
    """Run each check in order and collect a report per check."""
    settings = settings or Settings.load()
    return [_report_for(params, settings) for params in checks]
