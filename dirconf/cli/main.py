from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List

from .. import config
from ..core.errors import DirconfError
from ..core.executor import Executor
from ..core.report import TextUi
from ..core.state import SystemState
from ..repo.loader import collect_files, load_objectives, load_properties
from ..template.renderer import render_file
from ..utils.logger import setup_logging


def _target(args: argparse.Namespace) -> SystemState:
    return SystemState(Path(args.target)).load()


def _executor(args: argparse.Namespace) -> Executor:
    ui = TextUi(verbose=args.verbose)
    return Executor(ui, no_confirm=getattr(args, "yes", False), dry_run=args.dry_run)


def cmd_list(args: argparse.Namespace) -> int:
    st = _target(args)
    if not st.installed:
        print("No packages installed.")
        return 0
    for name, info in sorted(st.installed.items()):
        print(f"{name} {info.full_version} {info.installed_at or ''}".rstrip())
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    target = _target(args)
    ex = _executor(args)
    failed = 0
    for path in collect_files(args.paths):
        objectives = load_objectives(path)
        result = ex.check(objectives, target)
        print(f"{path}\t{'OK' if result == 0 else 'FAILED'}")
        failed += result
    return 1 if failed else 0


def cmd_configure(args: argparse.Namespace) -> int:
    target = _target(args)
    ex = _executor(args)
    failed = 0
    for path in collect_files(args.paths):
        print(f"Configuring {path}")
        failed += ex.configure(load_objectives(path), target)
    return 1 if failed else 0


def cmd_purge(args: argparse.Namespace) -> int:
    target = _target(args)
    ex = _executor(args)
    failed = 0
    for path in reversed(collect_files(args.paths)):
        print(f"Purging {path}")
        failed += ex.remove(load_objectives(path), target)
    return 1 if failed else 0


def _parse_define(value: str) -> tuple[str, str]:
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    return key, val


def cmd_render(args: argparse.Namespace) -> int:
    variables: Dict[str, str] = {}
    props = args.properties or config.PROPERTIES_FILE
    if props:
        variables.update(load_properties(props))
    variables.update(dict(args.define or []))

    text = render_file(args.template, variables)
    if args.output:
        try:
            Path(args.output).write_text(text, encoding="utf-8")
        except OSError as e:
            raise DirconfError(f"Cannot write {args.output}: {e}") from e
    else:
        sys.stdout.write(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dirconf", description="Check and configure a directory-backed middleware platform"
    )
    sub = p.add_subparsers(dest="command")
    p.add_argument(
        "--dry-run",
        action="store_true",
        default=config.DRY_RUN,
        help="Print objectives without executing",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Show debug output")

    def add_target(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "-t", "--target", default=str(config.TARGET_FILE), help="Target system snapshot file"
        )

    sp_list = sub.add_parser("list", help="List packages deployed on the target")
    add_target(sp_list)
    sp_list.set_defaults(func=cmd_list)

    sp_check = sub.add_parser("check", help="Validate the given ccm files against the target")
    add_target(sp_check)
    sp_check.add_argument("paths", nargs="+", help="ccm files or directories")
    sp_check.set_defaults(func=cmd_check)

    sp_conf = sub.add_parser("configure", help="Bring the target in line with the given ccm files")
    add_target(sp_conf)
    sp_conf.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    sp_conf.add_argument("paths", nargs="+", help="ccm files or directories")
    sp_conf.set_defaults(func=cmd_configure)

    sp_purge = sub.add_parser("purge", help="Remove what the given ccm files configured")
    add_target(sp_purge)
    sp_purge.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    sp_purge.add_argument("paths", nargs="+", help="ccm files or directories")
    sp_purge.set_defaults(func=cmd_purge)

    sp_render = sub.add_parser("render", help="Render a template")
    sp_render.add_argument("template", help="Template file")
    sp_render.add_argument("-p", "--properties", help="key=value file with variables")
    sp_render.add_argument(
        "-D",
        "--define",
        action="append",
        type=_parse_define,
        metavar="KEY=VALUE",
        help="Set a variable (repeatable)",
    )
    sp_render.add_argument("-o", "--output", help="Write to this file instead of stdout")
    sp_render.set_defaults(func=cmd_render)

    return p


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else config.LOG_LEVEL)
    if not hasattr(args, "func"):
        parser.print_help()
        return 2
    try:
        return int(args.func(args) or 0)
    except DirconfError as e:
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
