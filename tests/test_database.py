"""
Tests for engine setup and the core package surface.
"""

import pytest

import dispatch.core as core
from dispatch.core import database
from dispatch.core.config import settings


@pytest.mark.asyncio
async def test_debug_turns_on_sql_echo(monkeypatch, tmp_path):
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_session_factory", None)
    monkeypatch.setattr(settings, "database_url_override", f"sqlite+aiosqlite:///{tmp_path}/echo.db")
    monkeypatch.setattr(settings, "database_echo", False)
    monkeypatch.setattr(settings, "debug", True)

    engine = database.get_engine()
    try:
        assert engine.echo is True
    finally:
        await database.close_db()


@pytest.mark.asyncio
async def test_echo_is_off_by_default(monkeypatch, tmp_path):
    monkeypatch.setattr(database, "_engine", None)
    monkeypatch.setattr(database, "_session_factory", None)
    monkeypatch.setattr(settings, "database_url_override", f"sqlite+aiosqlite:///{tmp_path}/quiet.db")
    monkeypatch.setattr(settings, "database_echo", False)
    monkeypatch.setattr(settings, "debug", False)

    engine = database.get_engine()
    try:
        assert engine.echo is False
    finally:
        await database.close_db()


def test_core_exports_resolve():
    for name in core.__all__:
        assert getattr(core, name) is not None
    assert "get_db" not in core.__all__
    assert not hasattr(database, "get_db")
