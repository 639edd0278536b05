from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def clean_sqltrace_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Ensure that SQLTRACE_* in the environment doesn't interfere
    for key in list(os.environ):
        if key.startswith('SQLTRACE_'):
            monkeypatch.delenv(key)


@pytest.fixture
def tmp_dir_cwd(tmp_path: Path) -> Iterator[Path]:
    """Change the working directory to a temporary directory."""
    cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(cwd)
