"""Configuration record for the include guard generator.

A `GuardConfig` is resolved once per run from CLI flags and, when the user
names one with `--config`, a dotenv-style defaults file:

    INCLUDE_GUARD_PREFIX=MYLIB
    INCLUDE_GUARD_LANGUAGE=c

Precedence is CLI flag > defaults file > built-in default. The defaults file
is strict: unknown keys and invalid enumerated values are errors. Output path
and overwrite are never taken from the file.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping

from dotenv import dotenv_values

from include_guard.guard_errors import GuardConfigError


class LanguageMode(str, Enum):
    NONE = "none"
    C = "c"
    CXX = "cxx"


class LineEndingMode(str, Enum):
    AUTO = "none"  # pick by host OS
    LF = "lf"
    CRLF = "crlf"


DEFAULT_PREFIX = "UUID"


class GuardVarsEnum(str, Enum):
    INCLUDE_GUARD_PREFIX = "INCLUDE_GUARD_PREFIX"
    INCLUDE_GUARD_SUFFIX = "INCLUDE_GUARD_SUFFIX"
    INCLUDE_GUARD_LANGUAGE = "INCLUDE_GUARD_LANGUAGE"
    INCLUDE_GUARD_LINE_ENDING = "INCLUDE_GUARD_LINE_ENDING"


@dataclass(frozen=True)
class GuardKeySpec:
    key: GuardVarsEnum
    default: str | None = None
    choices: type[Enum] | None = None


DEFAULTS_SCHEMA: tuple[GuardKeySpec, ...] = (
    GuardKeySpec(key=GuardVarsEnum.INCLUDE_GUARD_PREFIX, default=DEFAULT_PREFIX),
    GuardKeySpec(key=GuardVarsEnum.INCLUDE_GUARD_SUFFIX, default=None),
    GuardKeySpec(
        key=GuardVarsEnum.INCLUDE_GUARD_LANGUAGE,
        default=LanguageMode.NONE.value,
        choices=LanguageMode,
    ),
    GuardKeySpec(
        key=GuardVarsEnum.INCLUDE_GUARD_LINE_ENDING,
        default=LineEndingMode.AUTO.value,
        choices=LineEndingMode,
    ),
)


@dataclass(frozen=True)
class GuardConfig:
    output_path: Path | None = None
    overwrite: bool = False
    prefix: str = DEFAULT_PREFIX
    suffix: str | None = None
    language_mode: LanguageMode = LanguageMode.NONE
    line_ending_mode: LineEndingMode = LineEndingMode.AUTO


def check_defaults(
    kv: Mapping[str, str],
    *,
    context: str,
    schema: Iterable[GuardKeySpec] = DEFAULTS_SCHEMA,
) -> None:
    """Reject unknown keys and out-of-range values, reporting every problem at once."""
    specs = {spec.key.value: spec for spec in schema}
    problems: list[str] = []

    unknown = sorted(k for k in kv if k not in specs)
    if unknown:
        problems.append("Unknown key(s): " + ", ".join(unknown))

    for key, raw in kv.items():
        spec = specs.get(key)
        if spec is None or spec.choices is None:
            continue
        val = raw.strip().lower()
        allowed = [m.value for m in spec.choices]
        if val and val not in allowed:
            problems.append(f"{key}={val!r} is not one of: " + ", ".join(allowed))

    if problems:
        raise GuardConfigError(context=context, problems=problems)


def fill_defaults(kv: Mapping[str, str], schema: Iterable[GuardKeySpec] = DEFAULTS_SCHEMA) -> dict[str, str]:
    resolved: dict[str, str] = {}
    for spec in schema:
        value = (kv.get(spec.key.value) or "").strip()
        if value:
            resolved[spec.key.value] = value
        elif spec.default is not None:
            resolved[spec.key.value] = spec.default
    return resolved


def load_defaults_file(path: Path) -> dict[str, str]:
    """Read and check a defaults file, returning every known key resolved.

    `${VAR}` references are kept literally; nothing is read from the process
    environment.
    """
    context = f"defaults ({path})"
    if not path.is_file():
        raise GuardConfigError(context=context, problems=[f"Defaults file not found: {path}"])

    try:
        raw = dotenv_values(path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise GuardConfigError(context=context, problems=[f"Cannot read defaults file: {e}"]) from e

    # A bare `KEY` line parses as None; keep it so the name is still checked.
    kv = {k.strip(): (v or "").strip() for k, v in raw.items() if k and k.strip()}
    check_defaults(kv, context=context)
    return fill_defaults(kv)


def builtin_defaults() -> dict[str, str]:
    return fill_defaults({})
