"""
Command-line interface for glint.

This module is responsible for argument parsing and delegating to the
high-level orchestration in the prompt module. It is the only place
that writes to stdout or stderr.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .config import Config, color_from_env, format_from_env
from .diagnostics import describe_error
from .errors import FormatError, GlintError
from .logging_utils import configure_logging
from .prompt import run_prompt


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glint",
        description=(
            "Render a short, styled summary of a git working tree from a "
            "format string, for use in shell prompts."
        ),
    )

    parser.add_argument(
        "format",
        nargs="?",
        help="Format used inside git repositories (default: $GLINT_FORMAT or the built-in format).",
    )
    parser.add_argument(
        "-e",
        "--else-format",
        help="Format used outside git repositories.",
    )
    parser.add_argument(
        "-p",
        "--path",
        default=None,
        help="Path inside the repository to describe (default: current directory).",
    )
    parser.add_argument(
        "-b",
        "--bash-escapes",
        action="store_true",
        help="Wrap escape sequences for bash prompts so line wrapping stays correct.",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        help="Do not emit any terminal escape sequences.",
    )
    parser.set_defaults(color=None)

    parser.add_argument(
        "--silent",
        action="store_true",
        help="Print nothing instead of reporting errors in the format.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = Config(
        format=args.format if args.format is not None else format_from_env(),
        else_format=args.else_format,
        path=args.path,
        color=color_from_env() if args.color is None else args.color,
        bash_escapes=args.bash_escapes,
        silent=args.silent,
        verbosity=args.verbose,
    )

    configure_logging(verbosity=config.verbosity)

    try:
        output = run_prompt(config)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except FormatError as exc:
        if config.silent:
            return 0
        print(describe_error(exc, color=config.color), file=sys.stderr)
        return 1
    except GlintError as exc:
        print(f"glint: {describe_error(exc, color=config.color)}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
