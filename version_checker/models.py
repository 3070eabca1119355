from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from version_checker.params import BinaryKind, CheckVersionParams


CHECK_STATUS = Literal["passed", "failed"]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorInfo(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class CheckSpec(BaseModel):
    binary: BinaryKind
    minimum_version: str = Field(..., min_length=1, description="Dotted numeric floor, e.g. 1.5.0")
    working_dir: str = Field(default=".", description="Directory the binary is invoked from")

    @field_validator("binary", mode="before")
    @classmethod
    def _normalize_binary(cls, value: Any) -> Any:
        # Same case-insensitive names validate_params accepts
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_params(self) -> CheckVersionParams:
        return CheckVersionParams(
            binary=self.binary,
            minimum_version=self.minimum_version,
            working_dir=self.working_dir,
        )


class CheckManifest(BaseModel):
    schema_version: str = Field(default="1.0")
    checks: list[CheckSpec] = Field(default_factory=list)

    def to_params(self) -> list[CheckVersionParams]:
        return [spec.to_params() for spec in self.checks]


class CheckReport(BaseModel):
    schema_version: str = "1.0"

    binary: str
    minimum_version: str
    working_dir: str

    status: CHECK_STATUS
    actual_version: str | None = None
    checked_at: str = Field(default_factory=utc_now_iso)
    error: Optional[ErrorInfo] = None
