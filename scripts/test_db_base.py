"""Engine and session dependencies."""

import pytest

from merraine.db import base


@pytest.fixture(autouse=True)
def _fresh_engine(monkeypatch):
    monkeypatch.setattr(base, "_engine", None)
    monkeypatch.setattr(base, "_SessionLocal", None)


def test_get_engine_requires_database_url():
    with pytest.raises(ValueError, match="DATABASE_URL not configured"):
        base.get_engine()


def test_optional_db_yields_none_without_database():
    assert list(base.get_optional_db()) == [None]


def test_sqlite_url_creates_tables_and_sessions(monkeypatch, tmp_path):
    monkeypatch.setattr(base.settings, "database_url", f"sqlite:///{tmp_path / 'merraine.db'}")

    base.init_db()
    sessions = base.get_db()
    db = next(sessions)

    assert db.bind is base.get_engine()
    assert "credit_transactions" in base.Base.metadata.tables
    sessions.close()
    base.get_engine().dispose()
