from __future__ import annotations

import re

from version_checker.errors import InvalidVersionFormatError, NoVersionFoundError, VersionTooLowError


# Used to extract a version string from shell command output.
VERSION_REGEX_MATCHER = r"\d+(\.\d+)+"

_VERSION_RE = re.compile(VERSION_REGEX_MATCHER, re.ASCII)
_SEGMENT_RE = re.compile(r"\d+", re.ASCII)


def extract_version(output: str) -> str:
    m = _VERSION_RE.search(output or "")
    if not m:
        raise NoVersionFoundError()
    return m.group(0)


def parse_version(text: str, *, label: str = "version") -> tuple[int, ...]:
    segments = (text or "").split(".")
    if not all(_SEGMENT_RE.fullmatch(s) for s in segments):
        raise InvalidVersionFormatError(
            f"invalid version format found for {label}: {text}",
            value=text,
        )
    try:
        return tuple(int(s) for s in segments)
    except ValueError as e:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise InvalidVersionFormatError(
            f"invalid version format found for {label}: {text}",
            value=text,
        ) from e


def is_version_at_least(actual_version: str, minimum_version: str) -> bool:
    # Tuple ordering: when one version is a prefix of the other, the shorter
    # one is lower, so 1.0 < 1.0.10 and 1.2 < 1.2.0.
    actual = parse_version(actual_version, label="actual_version")
    minimum = parse_version(minimum_version, label="minimum_version")
    return actual >= minimum


def check_minimum_version(actual_version: str, minimum_version: str) -> None:
    """Raise VersionTooLowError unless actual_version >= minimum_version.

        check_minimum_version("1.0.31", "1.0.27")  # ok
        check_minimum_version("1.0.10", "1.0.27")  # VersionTooLowError
        check_minimum_version("1.0", "1.0.10")     # VersionTooLowError
    """
    if not is_version_at_least(actual_version, minimum_version):
        raise VersionTooLowError(actual_version=actual_version, minimum_version=minimum_version)
