#!/usr/bin/env python3
"""Generate a unique C/C++ include guard.

Usage:
  include_guard/generate_include_guard.py
  include_guard/generate_include_guard.py -o include/foo.h
  include_guard/generate_include_guard.py -o include/foo.h --overwrite --prefix FOO -x c
  include_guard/generate_include_guard.py --config .include-guard --line-ending lf

Notes:
- The guard symbol is <prefix>_<UUIDv7>[_<suffix>], uppercase, underscores only.
- Without --output the guard is printed to stdout.
- An existing output file is never touched unless --overwrite is given.
- --config names a dotenv-style defaults file (INCLUDE_GUARD_PREFIX,
  INCLUDE_GUARD_SUFFIX, INCLUDE_GUARD_LANGUAGE, INCLUDE_GUARD_LINE_ENDING).
  Flags given on the command line win over it.
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import Mapping

# Allow `python include_guard/generate_include_guard.py` from a source checkout.
if not __package__:
    sys.path.append(str(Path(__file__).resolve().parents[1]))

from include_guard.guard_errors import IncludeGuardError, InvalidArgumentError, MissingArgumentValueError
from include_guard.guard_output import emit
from include_guard.guard_schema import (
    GuardConfig,
    GuardVarsEnum,
    LanguageMode,
    LineEndingMode,
    builtin_defaults,
    load_defaults_file,
)
from include_guard.guard_text import generate_guard

logger = logging.getLogger("include_guard")

_MISSING_VALUE_RE = re.compile(r"argument (\S+): expected one argument")


class _GuardArgumentParser(argparse.ArgumentParser):
    """Reports usage errors as exceptions so every failure exits with status 1."""

    def error(self, message: str):
        m = _MISSING_VALUE_RE.match(message)
        if m:
            raise MissingArgumentValueError(max(m.group(1).split("/"), key=len))
        raise InvalidArgumentError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _GuardArgumentParser(description="Generate a unique C/C++ include guard")
    parser.add_argument("--output", "-o", help="Write the guard to this file instead of stdout")
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Truncate and rewrite the output file if it already exists",
    )
    parser.add_argument("--prefix", default=None, help="Guard name prefix (default: UUID)")
    parser.add_argument("--suffix", default=None, help="Guard name suffix (default: none)")
    parser.add_argument(
        "-x",
        dest="language",
        type=str.lower,
        choices=[m.value for m in LanguageMode],
        default=None,
        help="Language compatibility mode; 'c' adds an extern \"C\" block (default: none)",
    )
    parser.add_argument(
        "--line-ending",
        type=str.lower,
        choices=[m.value for m in LineEndingMode],
        default=None,
        help="Newline style; 'none' picks CRLF on Windows and LF elsewhere (default: none)",
    )
    parser.add_argument("--config", help="Read defaults from this dotenv-style file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug details to stderr")
    return parser


def _configure_logging(verbose: bool) -> None:
    for h in list(logger.handlers):
        logger.removeHandler(h)
    if not verbose:
        logger.setLevel(logging.WARNING)
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


def resolve_config(args: argparse.Namespace, defaults: Mapping[str, str]) -> GuardConfig:
    prefix = args.prefix
    if prefix is None:
        prefix = defaults.get(GuardVarsEnum.INCLUDE_GUARD_PREFIX.value, "")

    suffix = args.suffix
    if suffix is None:
        suffix = defaults.get(GuardVarsEnum.INCLUDE_GUARD_SUFFIX.value)

    language = args.language or defaults.get(GuardVarsEnum.INCLUDE_GUARD_LANGUAGE.value) or LanguageMode.NONE.value
    line_ending = (
        args.line_ending
        or defaults.get(GuardVarsEnum.INCLUDE_GUARD_LINE_ENDING.value)
        or LineEndingMode.AUTO.value
    )

    return GuardConfig(
        output_path=Path(args.output).expanduser() if args.output else None,
        overwrite=args.overwrite,
        prefix=prefix,
        suffix=suffix or None,
        language_mode=LanguageMode(language.lower()),
        line_ending_mode=LineEndingMode(line_ending.lower()),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        _configure_logging(args.verbose)

        if args.config:
            defaults = load_defaults_file(Path(args.config).expanduser())
        else:
            defaults = builtin_defaults()

        config = resolve_config(args, defaults)
        logger.debug("Resolved %s", config)

        guard = generate_guard(
            prefix=config.prefix,
            suffix=config.suffix,
            language_mode=config.language_mode,
            line_ending_mode=config.line_ending_mode,
        )
        emit(guard, config)
    except IncludeGuardError as e:
        print(e.format(), file=sys.stderr)
        return e.exit_code

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
