from __future__ import annotations

import sys
from pathlib import Path

import pytest

FIXED_TOKEN = "0192A4C2_7E1B_7C3D_9F00_1A2B3C4D5E6F"


def pytest_configure() -> None:
    # Allow tests to import `include_guard` from a source checkout.
    repo_root = Path(__file__).parents[2]
    sys.path.append(str(repo_root))


@pytest.fixture
def fixed_token(monkeypatch) -> str:
    """Pin the guard token so whole outputs can be compared."""
    from include_guard import guard_text

    monkeypatch.setattr(guard_text, "new_guard_token", lambda: FIXED_TOKEN)
    return FIXED_TOKEN
