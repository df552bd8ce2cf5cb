from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from include_guard.guard_errors import FileAlreadyExistsError, GuardIoError, PermissionDeniedError
from include_guard.guard_schema import GuardConfig

logger = logging.getLogger("include_guard.output")


def _reason(e: OSError) -> str:
    return e.strerror or str(e)


def write_guard_file(path: Path, guard_text: str, *, overwrite: bool = False) -> None:
    """Write the guard to `path` as raw bytes.

    Refuses to touch an existing entry unless `overwrite` is set. Without
    overwrite the file is created exclusively, so an entry that appears between
    the check and the open is still refused.
    """
    if not overwrite and path.exists():
        raise FileAlreadyExistsError(path)

    mode = "wb" if overwrite else "xb"
    logger.debug("Opening %s with mode %s", path, mode)
    try:
        f = open(path, mode)
    except FileExistsError:
        raise FileAlreadyExistsError(path) from None
    except PermissionError as e:
        raise PermissionDeniedError(path, _reason(e)) from e
    except OSError as e:
        raise GuardIoError(path, _reason(e), action="creating") from e

    data = guard_text.encode("utf-8")
    # No cleanup of a partially written file.
    try:
        with f:
            f.write(data)
    except PermissionError as e:
        raise PermissionDeniedError(path, _reason(e)) from e
    except OSError as e:
        raise GuardIoError(path, _reason(e), action="writing to") from e

    logger.debug("Wrote %d bytes to %s", len(data), path)


def write_guard_stdout(guard_text: str) -> None:
    """Print the guard plus one platform newline, bypassing newline translation.

    The guard already carries its resolved line endings; a translating text
    stream would turn each CRLF into CR CR LF.
    """
    stream = sys.stdout
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        stream.write(guard_text + os.linesep)
        stream.flush()
        return

    stream.flush()
    buffer.write((guard_text + os.linesep).encode("utf-8"))
    buffer.flush()


def emit(guard_text: str, config: GuardConfig) -> None:
    if config.output_path is None:
        write_guard_stdout(guard_text)
        return

    write_guard_file(config.output_path, guard_text, overwrite=config.overwrite)
    print(f"Guard written to '{config.output_path}'.")
