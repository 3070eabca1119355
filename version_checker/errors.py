from __future__ import annotations


class VersionCheckError(RuntimeError):
    """Base class for recoverable version check failures."""

    code = "version_check_error"


class MissingFieldError(VersionCheckError):
    code = "missing_field"

    def __init__(self, field: str) -> None:
        super().__init__(f"set {field} in params")
        self.field = field


class InvalidVersionFormatError(VersionCheckError):
    code = "invalid_format"

    def __init__(self, message: str, *, value: str) -> None:
        super().__init__(message)
        self.value = value


class ExecutionFailedError(VersionCheckError):
    code = "execution_failed"

    def __init__(self, message: str, *, binary: str, version_arg: str) -> None:
        super().__init__(message)
        self.binary = binary
        self.version_arg = version_arg


class NoVersionFoundError(VersionCheckError):
    code = "no_version_found"

    def __init__(self) -> None:
        super().__init__("failed to find version using regex matcher")


class ExtractionFailedError(VersionCheckError):
    code = "extraction_failed"

    def __init__(self, message: str, *, output: str) -> None:
        super().__init__(message)
        self.output = output


class VersionTooLowError(VersionCheckError):
    code = "version_too_low"

    def __init__(self, *, actual_version: str, minimum_version: str) -> None:
        super().__init__(
            f"found version mismatch: actual version {{{actual_version}}} "
            f"is lower than minimum version {{{minimum_version}}}"
        )
        self.actual_version = actual_version
        self.minimum_version = minimum_version


class UnsupportedBinaryError(AssertionError):
    # Raised only when BinaryKind grows without a matching executable entry.
    code = "unsupported_binary"
