"""Rendering of doctor reports as a Rich table or as JSON."""

from __future__ import annotations

import json
from collections.abc import Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nextforge.utils import console as default_console

from .models import CheckStatus, DoctorFlags, DoctorReport

STATUS_STYLES: dict[CheckStatus, str] = {
    CheckStatus.PASS: "bold green",
    CheckStatus.WARN: "bold yellow",
    CheckStatus.FAIL: "bold red",
}


def colors_disabled(flags: DoctorFlags, env: Mapping[str, str]) -> bool:
    """Plain output for ``--ci``/``--json`` or when the environment asks for it."""
    return (
        flags.ci
        or flags.json_output
        or "NO_COLOR" in env
        or env.get("FORCE_COLOR") == "0"
        or env.get("TERM") == "dumb"
    )


def build_table(report: DoctorReport, verbose: bool = False, color: bool = True) -> Table:
    table = Table(show_header=True, header_style="bold cyan" if color else "", expand=False)
    table.add_column("Status", no_wrap=True)
    table.add_column("Check", no_wrap=True)
    table.add_column("Result")

    def _styled(text: str, style: str) -> str:
        return f"[{style}]{escape(text)}[/{style}]" if color else escape(text)

    for r in report.results:
        lines = [escape(r.message)]
        if r.fix:
            lines.append(_styled(f"Fix: {r.fix}", "dim"))
        if verbose and r.details:
            lines.append(_styled(r.details.rstrip(), "dim"))
        table.add_row(
            _styled(r.status.value.upper(), STATUS_STYLES[r.status]),
            escape(r.title),
            "\n".join(lines),
        )
    return table


def summary_line(report: DoctorReport) -> str:
    counts = report.summary()
    parts = []
    if counts["passed"]:
        parts.append(f"{counts['passed']} passed")
    if counts["warnings"]:
        parts.append(f"{counts['warnings']} warnings")
    if counts["failed"]:
        parts.append(f"{counts['failed']} failed")
    return f"Summary: {', '.join(parts) or 'no checks'} | Exit {report.exit_code}"


def render_report(
    report: DoctorReport,
    flags: DoctorFlags,
    env: Mapping[str, str] | None = None,
    console: Console | None = None,
) -> None:
    """Print *report* to *console* (default: the shared nextforge console)."""
    out = console or default_console
    if flags.json_output:
        # Bypass Rich so the document stays byte-for-byte valid JSON.
        out.file.write(json.dumps(report.as_json(), indent=2) + "\n")
        out.file.flush()
        return

    no_color = colors_disabled(flags, env or {})
    out.print()
    out.print("nextforge doctor report", style=None if no_color else "bold")
    out.print()
    out.print(build_table(report, verbose=flags.verbose, color=not no_color))
    out.print(summary_line(report), style=None if no_color else "bold")
    out.print()
