# tests/test_config.py
from pathlib import Path

import pytest

from filemerger.config import Settings
from filemerger.di import build_container
from filemerger.errors import InvalidArguments


def test_roots_from_settings(tmp_path: Path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    s = Settings(ALLOWED_DIRECTORIES=f"{a}, {b}")
    container = build_container(s)
    assert container.gateway.list_allowed_roots() == [str(a.resolve()), str(b.resolve())]


def test_command_line_roots_take_precedence(tmp_path: Path):
    a = tmp_path / "a"
    b = tmp_path / "b"
    a.mkdir()
    b.mkdir()
    s = Settings(ALLOWED_DIRECTORIES=str(a))
    container = build_container(s, roots=[str(b)])
    assert container.roots.as_strings() == [str(b.resolve())]


def test_defaults_to_cwd(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ALLOWED_DIRECTORIES", raising=False)
    monkeypatch.delenv("ALLOW_ALL_PATHS", raising=False)
    container = build_container(Settings(_env_file=None))
    assert container.roots.as_strings() == [str(tmp_path.resolve())]


def test_settings_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("ALLOW_ALL_PATHS", "true")
    monkeypatch.setenv("MERGE_ATOMIC_WRITES", "false")
    monkeypatch.setenv("MERGE_CHUNK_SIZE", "1024")
    monkeypatch.delenv("ALLOWED_DIRECTORIES", raising=False)
    container = build_container(Settings(_env_file=None))
    assert container.roots.is_unrestricted
    assert container.merger.atomic is False
    assert container.merger.chunk_size == 1024


def test_missing_directory_refuses_to_start(tmp_path: Path):
    with pytest.raises(InvalidArguments):
        build_container(Settings(ALLOWED_DIRECTORIES=str(tmp_path / "missing")))
