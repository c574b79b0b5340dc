"""Data models for ``nextforge doctor``."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CheckStatus(str, Enum):
    """Verdict of a single check, ordered by severity."""

    PASS = "pass"
    WARN = "warn"
    FAIL = "fail"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    @property
    def exit_code(self) -> int:
        # pass 0, warn 1, fail 2
        return _SEVERITY[self]


_SEVERITY = {CheckStatus.PASS: 0, CheckStatus.WARN: 1, CheckStatus.FAIL: 2}


class CheckResult(BaseModel):
    """What a check reports.  Failing results must say how to fix them."""

    model_config = ConfigDict(frozen=True)

    status: CheckStatus
    message: str
    fix: str | None = None

    @model_validator(mode="after")
    def _fail_needs_fix(self) -> "CheckResult":
        if self.status is CheckStatus.FAIL and not (self.fix and self.fix.strip()):
            raise ValueError("a failing check result needs a non-empty fix")
        return self

    @classmethod
    def ok(cls, message: str, fix: str | None = None) -> "CheckResult":
        return cls(status=CheckStatus.PASS, message=message, fix=fix)

    @classmethod
    def warn(cls, message: str, fix: str | None = None) -> "CheckResult":
        return cls(status=CheckStatus.WARN, message=message, fix=fix)

    @classmethod
    def fail(cls, message: str, fix: str) -> "CheckResult":
        return cls(status=CheckStatus.FAIL, message=message, fix=fix)


class DoctorFlags(BaseModel):
    """Flags accepted by ``nextforge doctor``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app: str | None = None
    json_output: bool = Field(default=False, alias="json")
    ci: bool = False
    verbose: bool = False


class ExecutionContext(BaseModel):
    """Read-only inputs shared by every check in a run.

    ``env`` is a snapshot of the environment variables, so checks never
    read ``os.environ`` directly.
    """

    model_config = ConfigDict(frozen=True)

    working_directory: Path
    flags: DoctorFlags = Field(default_factory=DoctorFlags)
    env: Mapping[str, str] = Field(default_factory=dict)

    @field_validator("env", mode="after")
    @classmethod
    def _freeze_env(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))


class DoctorResult(BaseModel):
    """A check result tagged with the check that produced it."""

    id: str
    title: str
    status: CheckStatus
    message: str
    fix: str | None = None
    details: str | None = None


class DoctorReport(BaseModel):
    """All results of one run, in registration order."""

    results: list[DoctorResult] = Field(default_factory=list)

    @property
    def status(self) -> CheckStatus:
        return aggregate_status(r.status for r in self.results)

    @property
    def exit_code(self) -> int:
        return self.status.exit_code

    def count(self, status: CheckStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    def summary(self) -> dict[str, int]:
        return {
            "passed": self.count(CheckStatus.PASS),
            "warnings": self.count(CheckStatus.WARN),
            "failed": self.count(CheckStatus.FAIL),
            "total": len(self.results),
        }

    def as_json(self) -> dict[str, Any]:
        return {
            "schema": "nextforge.doctor@1",
            "ok": self.status is not CheckStatus.FAIL,
            "exitCode": self.exit_code,
            "summary": self.summary(),
            "results": [r.model_dump(mode="json") for r in self.results],
        }


def aggregate_status(statuses) -> CheckStatus:
    """Worst status wins: any ``fail`` is ``fail``, else any ``warn``, else ``pass``."""
    worst = CheckStatus.PASS
    for status in statuses:
        status = CheckStatus(status)
        if status.severity > worst.severity:
            worst = status
    return worst
