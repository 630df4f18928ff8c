from __future__ import annotations

import pytest

from backend.app.database import _resolve_database_url, build_engine_kwargs


def test_sqlite_url_creates_parent_directory(tmp_path):
    target = tmp_path / "nested" / "meca.db"

    url = _resolve_database_url(f"sqlite:///{target}")

    assert url.endswith("meca.db")
    assert target.parent.is_dir()


def test_require_postgres_rejects_sqlite(monkeypatch, tmp_path):
    monkeypatch.setenv("REQUIRE_POSTGRES", "1")

    with pytest.raises(RuntimeError):
        _resolve_database_url(f"sqlite:///{tmp_path / 'meca.db'}")
    with pytest.raises(RuntimeError):
        _resolve_database_url(None)


def test_engine_kwargs_read_pool_settings(monkeypatch):
    monkeypatch.setenv("DATABASE_POOL_SIZE", "12")

    kwargs = build_engine_kwargs("postgresql://meca:secret@db/meca")

    assert kwargs["pool_size"] == 12
    assert kwargs["pool_pre_ping"] is True
    assert build_engine_kwargs("sqlite:///meca.db") == {"connect_args": {"check_same_thread": False}}


def test_engine_kwargs_reject_negative_values(monkeypatch):
    monkeypatch.setenv("DATABASE_POOL_RECYCLE", "-1")

    with pytest.raises(ValueError):
        build_engine_kwargs("postgresql://meca:secret@db/meca")
