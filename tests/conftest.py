"""Shared helpers for specparity tests."""

import textwrap
from pathlib import Path

import pytest


@pytest.fixture()
def write_rb(tmp_path: Path):
    """Fixture that returns a helper to write a Ruby file under tmp_path."""

    def _write(rel_path: str, code: str) -> Path:
        f = tmp_path / rel_path
        f.parent.mkdir(parents=True, exist_ok=True)
        f.write_text(textwrap.dedent(code))
        return f

    return _write


@pytest.fixture()
def project_root(tmp_path: Path, monkeypatch):
    """Point specparity's project root at tmp_path."""
    monkeypatch.setattr("specparity.utils.PROJECT_ROOT", tmp_path.resolve())
    return tmp_path.resolve()


def dedent(code: str) -> str:
    return textwrap.dedent(code)
