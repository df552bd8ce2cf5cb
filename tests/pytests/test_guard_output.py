from __future__ import annotations

import io
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from include_guard import guard_output
from include_guard.guard_errors import FileAlreadyExistsError, GuardIoError, PermissionDeniedError
from include_guard.guard_output import emit, write_guard_file
from include_guard.guard_schema import GuardConfig

GUARD = "#ifndef X\r\n#define X\r\n#endif /* X */\r\n\r\n"


def test_emit_stdout_prints_guard_and_newline(capsys) -> None:
    emit("#ifndef X\n#define X\n#endif /* X */\n\n", GuardConfig())
    out = capsys.readouterr().out
    assert out == "#ifndef X\n#define X\n#endif /* X */\n\n\n"


def test_write_creates_file_with_exact_bytes(tmp_path: Path) -> None:
    path = tmp_path / "foo.h"
    write_guard_file(path, GUARD)
    assert path.read_bytes() == GUARD.encode("utf-8")


def test_write_refuses_existing_without_overwrite(tmp_path: Path) -> None:
    path = tmp_path / "foo.h"
    path.write_text("original")

    with pytest.raises(FileAlreadyExistsError) as exc:
        write_guard_file(path, GUARD)

    assert str(path) in exc.value.format()
    assert "--overwrite" in exc.value.format()
    assert path.read_text() == "original"


def test_write_refuses_existing_directory(tmp_path: Path) -> None:
    with pytest.raises(FileAlreadyExistsError):
        write_guard_file(tmp_path, GUARD)


def test_write_overwrite_truncates(tmp_path: Path) -> None:
    path = tmp_path / "foo.h"
    path.write_text("x" * 500)

    write_guard_file(path, GUARD, overwrite=True)
    assert path.read_bytes() == GUARD.encode("utf-8")


def test_write_race_with_creation_is_refused(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "foo.h"

    def _open(p, mode):
        raise FileExistsError(17, "File exists")

    monkeypatch.setattr(guard_output, "open", _open, raising=False)
    with pytest.raises(FileAlreadyExistsError):
        write_guard_file(path, GUARD)


def test_write_permission_denied_on_create(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "foo.h"

    def _open(p, mode):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(guard_output, "open", _open, raising=False)
    with pytest.raises(PermissionDeniedError) as exc:
        write_guard_file(path, GUARD)

    assert exc.value.path == path
    assert "Permission denied" in exc.value.format()


def test_write_missing_parent_dir_is_io_error(tmp_path: Path) -> None:
    path = tmp_path / "missing" / "foo.h"
    with pytest.raises(GuardIoError) as exc:
        write_guard_file(path, GUARD)

    assert exc.value.action == "creating"
    assert str(path) in exc.value.format()


def test_write_failure_is_io_error_and_closes_handle(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "foo.h"
    handle = MagicMock()
    handle.__enter__.return_value = handle
    handle.__exit__.return_value = False
    handle.write.side_effect = OSError(28, "No space left on device")

    monkeypatch.setattr(guard_output, "open", lambda p, mode: handle, raising=False)
    with pytest.raises(GuardIoError) as exc:
        write_guard_file(path, GUARD)

    assert exc.value.action == "writing to"
    assert "No space left on device" in exc.value.format()
    handle.__exit__.assert_called_once()


def test_emit_to_file_prints_confirmation(tmp_path: Path, capsys) -> None:
    path = tmp_path / "foo.h"
    emit(GUARD, GuardConfig(output_path=path))

    assert path.read_bytes() == GUARD.encode("utf-8")
    assert capsys.readouterr().out == f"Guard written to '{path}'.\n"


def test_emit_stdout_keeps_crlf_on_translating_stream(monkeypatch) -> None:
    raw = io.BytesIO()
    stream = io.TextIOWrapper(raw, encoding="utf-8", newline="\r\n")
    monkeypatch.setattr(sys, "stdout", stream)

    emit(GUARD, GuardConfig())

    data = raw.getvalue()
    assert b"\r\r\n" not in data
    assert data == (GUARD + os.linesep).encode("utf-8")
