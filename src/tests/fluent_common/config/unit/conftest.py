"""Fixtures for config module tests."""

from pathlib import Path

import pytest


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at an empty temporary directory.

    Returns
    -------
    Path
        The temporary home directory
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def project_root(tmp_path: Path, isolated_home: Path) -> Path:
    """Empty project directory with an isolated home."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_yaml():
    """Write YAML text to a file, creating parent directories."""

    def _write(path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
