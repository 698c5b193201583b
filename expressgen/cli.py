#!/usr/bin/env python3
"""
CLI Entry Point — generate an Express application skeleton
===========================================================
Usage:
    express [options] [dir]
    python -m expressgen --view=pug --css=sass --git myapp

Exit codes: 0 on success (including --help / --version), 1 on usage errors,
an aborted prompt, or a filesystem error while writing.
"""
from __future__ import annotations

import argparse
import re
import sys
from typing import NoReturn, Optional, Sequence

from . import __version__
from .config import Settings, setup_logging
from .generator import create_application, is_empty_directory, warning
from .scaffold import CSS_ENGINES, VIEW_ENGINES, ScaffoldOptions

PROG = "express"

# Legacy engine flags and the --view value each one stands for. When several
# are given, later entries override earlier ones.
_RENAMED_VIEW_FLAGS = {
    "ejs": ("--ejs", "ejs"),
    "hbs": ("--hbs", "hbs"),
    "hogan": ("--hogan", "hjs"),
    "pug": ("--pug", "pug"),
}

_MISSING_VALUE_RE = re.compile(r"^argument (\S+): expected one argument")
_UNRECOGNIZED_RE = re.compile(r"^unrecognized arguments: (.*)$")


class _HelpFormatter(argparse.HelpFormatter):
    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = "Usage: "
        return super().add_usage(usage, actions, groups, prefix)


class _ArgumentParser(argparse.ArgumentParser):
    """
    argparse with commander-style diagnostics: help on stdout, a single
    ``error: ...`` line on stderr and exit status 1.
    """

    def error(self, message: str) -> NoReturn:
        self.fail(self._translate(message))

    def fail(self, message: str) -> NoReturn:
        self.print_help(sys.stdout)
        sys.stderr.write(f"\n  error: {message}\n\n")
        self.exit(1)

    def flag_spec(self, dest: str) -> str:
        """``-c, --css <engine>`` for the option stored in *dest*."""
        for action in self._actions:
            if action.dest == dest and action.option_strings:
                spec = ", ".join(action.option_strings)
                if action.metavar:
                    spec += f" <{action.metavar}>"
                return spec
        return dest

    def _translate(self, message: str) -> str:
        match = _MISSING_VALUE_RE.match(message)
        if match:
            option = match.group(1).split("/")[-1]
            action = self._option_string_actions.get(option)
            if action is not None:
                return f"option `{self.flag_spec(action.dest)}' argument missing"
        match = _UNRECOGNIZED_RE.match(message)
        if match:
            extra = match.group(1).split()
            flags = [arg for arg in extra if arg.startswith("-")]
            if flags:
                return f"unknown option `{flags[0].split('=')[0]}'"
            return "too many arguments"
        return message


def build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        usage="%(prog)s [options] [dir]",
        formatter_class=_HelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__,
        help="output the version number",
    )
    parser.add_argument("-e", "--ejs", action="store_true", help="add ejs engine support")
    parser.add_argument("--pug", action="store_true", help="add pug engine support")
    parser.add_argument("--hbs", action="store_true", help="add handlebars engine support")
    parser.add_argument("-H", "--hogan", action="store_true", help="add hogan.js engine support")
    parser.add_argument(
        "-v", "--view",
        metavar="engine",
        default=None,
        help=(
            f"add view <engine> support ({'|'.join(VIEW_ENGINES)}) "
            "(defaults to jade)"
        ),
    )
    parser.add_argument(
        "--no-view",
        dest="no_view",
        action="store_true",
        help="use static html instead of view engine",
    )
    parser.add_argument(
        "-c", "--css",
        metavar="engine",
        default=None,
        help=(
            f"add stylesheet <engine> support ({'|'.join(CSS_ENGINES)}) "
            "(defaults to plain css)"
        ),
    )
    parser.add_argument("--git", action="store_true", help="add .gitignore")
    parser.add_argument("--es5", action="store_true", help="generate ES5 compatible code")
    parser.add_argument("-f", "--force", action="store_true", help="force on non-empty directory")
    parser.add_argument("dir", nargs="?", default=".", help=argparse.SUPPRESS)
    return parser


def resolve_options(args: argparse.Namespace, parser: _ArgumentParser) -> ScaffoldOptions:
    """
    Map parsed flags onto ScaffoldOptions, printing advisories for renamed
    flags and for the implicit jade default.
    """
    if args.view is not None and args.view not in VIEW_ENGINES:
        parser.fail(f"option `{parser.flag_spec('view')}' argument `{args.view}' is invalid")
    if args.css is not None and args.css not in CSS_ENGINES:
        parser.fail(f"option `{parser.flag_spec('css')}' argument `{args.css}' is invalid")

    for dest, (flag, engine) in _RENAMED_VIEW_FLAGS.items():
        if getattr(args, dest):
            warning(f"option `{flag}' has been renamed to `--view={engine}'")

    view: Optional[str] = args.view
    if args.no_view:
        view = None
    elif view is None:
        for dest, (_flag, engine) in _RENAMED_VIEW_FLAGS.items():
            if getattr(args, dest):
                view = engine
        if view is None:
            warning(
                "the default view engine will not be jade in future releases\n"
                "use `--view=jade' or `--help' for additional options"
            )
            view = "jade"

    return ScaffoldOptions(view=view, css=args.css, git=args.git, es5=args.es5)


def confirm(prompt: str) -> bool:
    """Ask a yes/no question on stdin; EOF counts as no."""
    sys.stdout.write(prompt)
    sys.stdout.flush()
    try:
        answer = input()
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    parser = build_parser()
    args = parser.parse_args(argv)
    options = resolve_options(args, parser)

    if not args.force and not is_empty_directory(args.dir):
        if not confirm("destination is not empty, continue? [y/N] "):
            print("aborting", file=sys.stderr)
            return 1

    try:
        create_application(args.dir, options)
    except OSError as exc:
        print(f"\n  error: {exc}\n", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
