"""Errors raised while resolving arguments or emitting an include guard.

Every error is terminal: `main()` prints `format()` once to stderr and exits 1.
"""

from __future__ import annotations

from pathlib import Path


class IncludeGuardError(Exception):
    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def format(self) -> str:
        return f"[guard] error: {self.message}"


class MissingArgumentValueError(IncludeGuardError):
    def __init__(self, flag: str):
        super().__init__(f"Missing value for {flag}")
        self.flag = flag


class InvalidArgumentError(IncludeGuardError):
    pass


class FileAlreadyExistsError(IncludeGuardError):
    def __init__(self, path: Path):
        super().__init__(f"File '{path}' already exists. Use --overwrite to overwrite.")
        self.path = path


class PermissionDeniedError(IncludeGuardError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Permission denied for file '{path}': {reason}")
        self.path = path
        self.reason = reason


class GuardIoError(IncludeGuardError):
    def __init__(self, path: Path, reason: str, *, action: str = "creating"):
        super().__init__(f"Error {action} file '{path}': {reason}")
        self.path = path
        self.reason = reason
        self.action = action


class GuardConfigError(IncludeGuardError):
    def __init__(self, *, context: str, problems: list[str]):
        super().__init__("; ".join(problems))
        self.context = context
        self.problems = problems

    def format(self) -> str:
        lines = [f"[guard] config invalid: {self.context}"]
        for p in self.problems:
            lines.append(f"- {p}")
        return "\n".join(lines)
