"""Build the text of a C/C++ include guard.

    #ifndef UUID_0192A4C2_7E1B_7C3D_9F00_1A2B3C4D5E6F
    #define UUID_0192A4C2_7E1B_7C3D_9F00_1A2B3C4D5E6F
    #endif /* UUID_0192A4C2_7E1B_7C3D_9F00_1A2B3C4D5E6F */

The token is a UUIDv7 so guards generated later sort after earlier ones.
"""

from __future__ import annotations

import sys

from uuid_extensions import uuid7

from include_guard.guard_schema import DEFAULT_PREFIX, LanguageMode, LineEndingMode

EXTERN_C_BLOCK: tuple[str, ...] = (
    "",
    "#ifdef __cplusplus",
    'extern "C" {',
    "#endif /* __cplusplus */",
    "",
    "#ifdef __cplusplus",
    '} /* extern "C" */',
    "#endif /* __cplusplus */",
    "",
)


def new_guard_token() -> str:
    """Fresh UUIDv7 as uppercase hex with underscores instead of hyphens."""
    return str(uuid7()).upper().replace("-", "_")


def build_guard_symbol(prefix: str, token: str, suffix: str | None = None) -> str:
    parts = [prefix, token]
    if suffix:
        parts.append(suffix)
    return "_".join(parts)


def resolve_newline(mode: LineEndingMode, platform: str | None = None) -> str:
    if mode == LineEndingMode.LF:
        return "\n"
    if mode == LineEndingMode.CRLF:
        return "\r\n"

    platform = sys.platform if platform is None else platform
    if platform.startswith(("win32", "cygwin", "msys")):
        return "\r\n"
    return "\n"


def generate_guard(
    prefix: str = DEFAULT_PREFIX,
    suffix: str | None = None,
    language_mode: LanguageMode = LanguageMode.NONE,
    line_ending_mode: LineEndingMode = LineEndingMode.AUTO,
) -> str:
    symbol = build_guard_symbol(prefix, new_guard_token(), suffix)

    lines = [
        f"#ifndef {symbol}",
        f"#define {symbol}",
    ]
    if language_mode == LanguageMode.C:
        lines.extend(EXTERN_C_BLOCK)
    lines.append(f"#endif /* {symbol} */")
    lines.append("")

    newline = resolve_newline(line_ending_mode)
    return "".join(line + newline for line in lines)
