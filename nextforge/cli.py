"""nextforge command-line interface.

Usage::

    nextforge init [--force] [--yes]
    nextforge add:component marketing/Hero --group section --with-tests
    nextforge doctor [--app src/app] [--json]
    nextforge list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from nextforge import __version__
from nextforge.config import load_config
from nextforge.doctor import DoctorFlags, run_doctor
from nextforge.paths import GROUPS
from nextforge.scaffolder import ComponentGenerator, ComponentRequest, run_init
from nextforge.scaffolder.component import FRAMEWORKS
from nextforge.utils import (
    console,
    print_error,
    print_success,
    print_summary_table,
    to_posix,
)

EXIT_OK = 0
EXIT_FAILURE = 2


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _add_verbose(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Enable verbose output",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nextforge",
        description="Forge components, configs and health checks for modern Next.js apps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  nextforge init --yes\n"
            "  nextforge add:component Button\n"
            "  nextforge add:component marketing/Hero --group section --with-story\n"
            "  nextforge doctor --json\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", action="store_true", default=False, help="Enable verbose output")

    sub = parser.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    init = sub.add_parser("init", help="Initialize nextforge configuration")
    init.add_argument("--force", action="store_true", help="Overwrite an existing config file")
    init.add_argument("--yes", action="store_true", help="Skip prompts and install missing tools")
    _add_verbose(init)

    component = sub.add_parser(
        "add:component", help="Create a component in <app>/components/<group>/<Name>"
    )
    component.add_argument("name", help="Component name, e.g. Button or marketing/Hero")
    component.add_argument(
        "--group", "--type",
        dest="group",
        default="ui",
        help=f"Component group: {' | '.join(GROUPS)} (default: ui)",
    )
    component.add_argument("--app", default=None, help="App directory (default: config pagesDir or app)")
    component.add_argument(
        "--framework",
        default=None,
        help=f"Override template: {' | '.join(FRAMEWORKS)} (takes precedence over config)",
    )
    component.add_argument("--client", action="store_true", help="Mark as a client component")
    component.add_argument("--with-tests", action="store_true", help="Create a basic test file")
    component.add_argument("--with-style", action="store_true", help="Create a CSS or Chakra style file")
    component.add_argument("--with-story", action="store_true", help="Create a Storybook story file")
    component.add_argument("--force", action="store_true", help="Overwrite existing files")
    component.add_argument(
        "--create-app", action="store_true", help="Create the app directory if it is missing"
    )
    _add_verbose(component)

    doctor = sub.add_parser("doctor", help="Run diagnostic checks on your Next.js project")
    doctor.add_argument("--app", default=None, help="App directory to check")
    doctor.add_argument("--json", action="store_true", help="Print a machine-readable report")
    doctor.add_argument("--ci", action="store_true", help="Plain output for CI logs")
    _add_verbose(doctor)

    sub.add_parser("list", help="List all available commands")
    parser.set_defaults(command_names=sorted(sub.choices))
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace, cwd: Path) -> int:
    asyncio.run(run_init(cwd, force=args.force, yes=args.yes))
    return EXIT_OK


def cmd_add_component(args: argparse.Namespace, cwd: Path) -> int:
    config = load_config(cwd, verbose=args.verbose)
    generator = ComponentGenerator(config, cwd=cwd, verbose=args.verbose)
    request = ComponentRequest(
        name=args.name,
        group=args.group,
        app=args.app,
        framework=args.framework,
        client=args.client,
        with_tests=args.with_tests,
        with_style=args.with_style,
        with_story=args.with_story,
        force=args.force,
        create_app=args.create_app,
    )
    result = asyncio.run(generator.generate(request))

    for path in result.written:
        console.print(f"write {_relative(path, cwd)}", markup=False)
    for path in result.skipped:
        console.print(f"skip  {_relative(path, cwd)} (exists)", markup=False)
    if result.barrel_created is not None:
        verb = "Created" if result.barrel_created else "Updated"
        console.print(f"{verb} barrel: {_relative(result.location.barrel_file_path, cwd)}", markup=False)

    if args.verbose:
        print_summary_table(
            {
                "Component": result.name,
                "Group": result.group,
                "Framework": result.framework,
                "Directory": _relative(result.location.component_directory, cwd),
                "Manifest": _relative(result.manifest_path, cwd) if result.manifest_path else "-",
            },
            title="add:component",
        )
    print_success(
        f"Created component {result.name} in {_relative(result.location.component_directory, cwd)}"
    )
    return EXIT_OK


def cmd_doctor(args: argparse.Namespace, cwd: Path) -> int:
    flags = DoctorFlags(app=args.app, json=args.json, ci=args.ci, verbose=args.verbose)
    return asyncio.run(run_doctor(flags, cwd=cwd))


def cmd_list(args: argparse.Namespace) -> int:
    for name in args.command_names:
        console.print(name, markup=False)
    return EXIT_OK


def _relative(path: Path, cwd: Path) -> str:
    try:
        return to_posix(path.relative_to(cwd))
    except ValueError:
        return to_posix(path)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    cwd = Path.cwd()

    handlers = {
        "init": lambda: cmd_init(args, cwd),
        "add:component": lambda: cmd_add_component(args, cwd),
        "doctor": lambda: cmd_doctor(args, cwd),
        "list": lambda: cmd_list(args),
    }
    try:
        return handlers[args.command]()
    except KeyboardInterrupt:
        print_error("Interrupted.")
        return 130
    except Exception as exc:
        print_error(f"{args.command} failed: {exc}")
        if args.verbose:
            console.print_exception()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
