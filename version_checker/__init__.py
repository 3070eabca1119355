from __future__ import annotations

from version_checker.checker import (
    BINARY_EXECUTABLES,
    DEFAULT_VERSION_ARG,
    check_version,
    check_version_e,
    get_version_with_shell_command,
    run_checks,
)
from version_checker.errors import (
    ExecutionFailedError,
    ExtractionFailedError,
    InvalidVersionFormatError,
    MissingFieldError,
    NoVersionFoundError,
    UnsupportedBinaryError,
    VersionCheckError,
    VersionTooLowError,
)
from version_checker.params import BinaryKind, CheckVersionParams, validate_params
from version_checker.versions import check_minimum_version, extract_version, is_version_at_least


__all__ = [
    "BINARY_EXECUTABLES",
    "DEFAULT_VERSION_ARG",
    "BinaryKind",
    "CheckVersionParams",
    "ExecutionFailedError",
    "ExtractionFailedError",
    "InvalidVersionFormatError",
    "MissingFieldError",
    "NoVersionFoundError",
    "UnsupportedBinaryError",
    "VersionCheckError",
    "VersionTooLowError",
    "check_minimum_version",
    "check_version",
    "check_version_e",
    "extract_version",
    "get_version_with_shell_command",
    "is_version_at_least",
    "run_checks",
    "validate_params",
]
