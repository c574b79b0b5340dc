"""Runs the doctor checks and aggregates their verdicts.

Checks run one after another in registration order against one shared
``ExecutionContext``.  A check that raises is recorded as a ``fail``
result and the run continues, so ``run_checks`` itself never raises for a
misbehaving check.
"""

from __future__ import annotations

import os
import traceback
from collections.abc import Iterable, Mapping
from pathlib import Path

from .checks import Check, get_checks
from .format import render_report
from .models import (
    CheckResult,
    CheckStatus,
    DoctorFlags,
    DoctorReport,
    DoctorResult,
    ExecutionContext,
)

_CRASH_FIX = "Re-run `nextforge doctor --verbose` for the traceback and report it if it persists."


async def run_check(check: Check, context: ExecutionContext) -> DoctorResult:
    """Run one check, turning any exception into a ``fail`` result."""
    try:
        result = await check.run(context)
        if not isinstance(result, CheckResult):
            raise TypeError(f"check returned {type(result).__name__}, expected CheckResult")
    except Exception as exc:
        return DoctorResult(
            id=check.id,
            title=check.title,
            status=CheckStatus.FAIL,
            message=str(exc) or f"Unexpected {type(exc).__name__} during check",
            fix=_CRASH_FIX,
            details=traceback.format_exc() if context.flags.verbose else None,
        )
    return DoctorResult(
        id=check.id,
        title=check.title,
        status=result.status,
        message=result.message,
        fix=result.fix,
    )


async def run_checks(
    context: ExecutionContext, checks: Iterable[Check] | None = None
) -> DoctorReport:
    """Run *checks* (default: the registered ones) and collect a report."""
    report = DoctorReport()
    for check in checks if checks is not None else get_checks():
        report.results.append(await run_check(check, context))
    return report


async def run_doctor(
    flags: DoctorFlags,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    checks: Iterable[Check] | None = None,
) -> int:
    """Entry point for ``nextforge doctor``: run, print, and return the exit code."""
    context = ExecutionContext(
        working_directory=Path(cwd) if cwd is not None else Path.cwd(),
        flags=flags,
        env=dict(os.environ if env is None else env),
    )
    report = await run_checks(context, checks)
    render_report(report, flags, env=context.env)
    return report.exit_code
