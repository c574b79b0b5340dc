"""Unit tests for doctor data models (nextforge.doctor.models)."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from nextforge.doctor.models import (
    CheckResult,
    CheckStatus,
    DoctorFlags,
    DoctorReport,
    DoctorResult,
    ExecutionContext,
    aggregate_status,
)

pytestmark = pytest.mark.unit


def _result(status: CheckStatus, id: str = "c") -> DoctorResult:
    return DoctorResult(id=id, title=id.upper(), status=status, message="m", fix="f")


class TestCheckStatus:
    def test_exit_codes(self):
        assert CheckStatus.PASS.exit_code == 0
        assert CheckStatus.WARN.exit_code == 1
        assert CheckStatus.FAIL.exit_code == 2

    def test_string_values(self):
        assert CheckStatus("warn") is CheckStatus.WARN


class TestCheckResult:
    def test_fail_requires_fix(self):
        with pytest.raises(ValidationError):
            CheckResult(status=CheckStatus.FAIL, message="broken")
        with pytest.raises(ValidationError):
            CheckResult(status=CheckStatus.FAIL, message="broken", fix="  ")

    def test_pass_and_warn_fix_is_optional(self):
        assert CheckResult.ok("fine").fix is None
        assert CheckResult.warn("hmm").fix is None

    def test_fail_constructor(self):
        result = CheckResult.fail("broken", fix="repair it")
        assert result.status is CheckStatus.FAIL
        assert result.fix == "repair it"

    def test_is_immutable(self):
        result = CheckResult.ok("fine")
        with pytest.raises(ValidationError):
            result.message = "changed"


class TestDoctorFlags:
    def test_json_alias(self):
        assert DoctorFlags(json=True).json_output is True
        assert DoctorFlags(json_output=True).json_output is True

    def test_defaults(self):
        flags = DoctorFlags()
        assert flags.app is None
        assert not (flags.json_output or flags.ci or flags.verbose)


class TestExecutionContext:
    def test_env_is_read_only_snapshot(self, tmp_path: Path):
        source = {"SHELL": "/bin/zsh"}
        context = ExecutionContext(working_directory=tmp_path, env=source)
        source["SHELL"] = "/bin/bash"

        assert context.env["SHELL"] == "/bin/zsh"
        with pytest.raises(TypeError):
            context.env["SHELL"] = "/bin/fish"


class TestAggregation:
    @pytest.mark.parametrize(
        "statuses, expected",
        [
            ([], CheckStatus.PASS),
            (["pass", "pass"], CheckStatus.PASS),
            (["pass", "warn"], CheckStatus.WARN),
            (["warn", "fail", "pass"], CheckStatus.FAIL),
            (["fail", "warn"], CheckStatus.FAIL),
        ],
    )
    def test_worst_status_wins(self, statuses, expected):
        assert aggregate_status(statuses) is expected

    def test_report_summary_and_exit_code(self):
        report = DoctorReport(
            results=[
                _result(CheckStatus.PASS, "a"),
                _result(CheckStatus.WARN, "b"),
                _result(CheckStatus.WARN, "c"),
            ]
        )
        assert report.exit_code == 1
        assert report.summary() == {"passed": 1, "warnings": 2, "failed": 0, "total": 3}

    def test_as_json(self):
        report = DoctorReport(results=[_result(CheckStatus.FAIL, "app-dir")])
        data = report.as_json()
        assert data["schema"] == "nextforge.doctor@1"
        assert data["ok"] is False
        assert data["exitCode"] == 2
        assert data["results"][0]["id"] == "app-dir"
        assert data["results"][0]["status"] == "fail"

    def test_empty_report_passes(self):
        report = DoctorReport()
        assert report.exit_code == 0
        assert report.as_json()["ok"] is True
