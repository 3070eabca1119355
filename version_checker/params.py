from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from version_checker.errors import InvalidVersionFormatError, MissingFieldError
from version_checker.versions import parse_version


# Expected versions are plain dotted numbers: 1, 1.2, 1.2.3, ...
_EXPECTED_VERSION_RE = re.compile(r"\d+(\.\d+)*", re.ASCII)


class BinaryKind(str, Enum):
    """Binaries supported for version checking."""

    DOCKER = "docker"
    TERRAFORM = "terraform"
    PACKER = "packer"


@dataclass(frozen=True)
class CheckVersionParams:
    binary: BinaryKind | str | None = None
    minimum_version: str = ""
    working_dir: str | Path = ""


def _coerce_binary(value: BinaryKind | str | None) -> BinaryKind | None:
    if isinstance(value, BinaryKind):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return BinaryKind(value.strip().lower())
    except ValueError:
        return None


def validate_params(params: CheckVersionParams) -> BinaryKind:
    """Check that params hold enough valid data to run a version check.

    Returns the binary coerced to BinaryKind so callers never re-parse it.
    """
    if not params.minimum_version:
        raise MissingFieldError("minimum_version")
    if not str(params.working_dir):
        raise MissingFieldError("working_dir")

    binary = _coerce_binary(params.binary)
    if binary is None:
        raise MissingFieldError("binary")

    message = f"invalid version format found {{{params.minimum_version}}}"
    if not _EXPECTED_VERSION_RE.fullmatch(params.minimum_version):
        raise InvalidVersionFormatError(message, value=params.minimum_version)
    # Reject digit runs int() cannot convert before any command runs
    try:
        parse_version(params.minimum_version, label="minimum_version")
    except InvalidVersionFormatError as e:
        raise InvalidVersionFormatError(message, value=params.minimum_version) from e

    return binary
