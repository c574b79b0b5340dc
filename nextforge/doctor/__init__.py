"""nextforge doctor -- environment health checks for a front-end project.

Quick usage::

    from nextforge.doctor import DoctorFlags, run_doctor

    exit_code = await run_doctor(DoctorFlags(app="src/app"), cwd=".")
"""

from nextforge.doctor.checks import (
    AppDirCheck,
    Check,
    NodeVersionCheck,
    ShellQuotingCheck,
    TsxLoaderCheck,
    get_checks,
)
from nextforge.doctor.models import (
    CheckResult,
    CheckStatus,
    DoctorFlags,
    DoctorReport,
    DoctorResult,
    ExecutionContext,
    aggregate_status,
)
from nextforge.doctor.runner import run_check, run_checks, run_doctor

__all__ = [
    "AppDirCheck",
    "Check",
    "CheckResult",
    "CheckStatus",
    "DoctorFlags",
    "DoctorReport",
    "DoctorResult",
    "ExecutionContext",
    "NodeVersionCheck",
    "ShellQuotingCheck",
    "TsxLoaderCheck",
    "aggregate_status",
    "get_checks",
    "run_check",
    "run_checks",
    "run_doctor",
]
