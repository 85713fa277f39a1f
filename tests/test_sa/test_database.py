# tests/test_sa/test_database.py
import pytest
from unittest.mock import patch
from sqlalchemy.exc import OperationalError
from storyhub.errors import StoreUnavailable
from storyhub.sa.database import Database, DEFAULT_DATABASE_URL
from storyhub.sa.models import User

def test_get_db_commits(database, db_session):
    with database.get_db() as session:
        session.add(User(external_id="ctx", username="ctx_user", email="ctx@example.com"))
    assert db_session.query(User).filter_by(username="ctx_user").count() == 1

def test_get_db_rolls_back_on_error(database, db_session):
    with pytest.raises(RuntimeError):
        with database.get_db() as session:
            session.add(User(external_id="ctx", username="ctx_user", email="ctx@example.com"))
            session.flush()
            raise RuntimeError("boom")
    assert db_session.query(User).filter_by(username="ctx_user").count() == 0

def test_get_db_store_unavailable(database):
    with pytest.raises(StoreUnavailable):
        with database.get_db():
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

def test_records_readable_after_session_closes(database):
    with database.get_db() as session:
        user = User(external_id="ctx", username="ctx_user", email="ctx@example.com")
        session.add(user)
    assert user.username == "ctx_user"
    assert user.id is not None

def test_url_from_environment(monkeypatch, tmp_path):
    url = f"sqlite:///{tmp_path / 'env.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    db = Database()
    assert db.connection_string == url
    db.dispose()

def test_default_url(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    db = Database()
    assert db.connection_string == DEFAULT_DATABASE_URL
    assert db.is_sqlite is True
    db.dispose()

def test_legacy_postgres_scheme():
    with patch("storyhub.sa.database.create_engine") as create_engine:
        db = Database("postgres://user:pw@localhost/stories")
    assert db.connection_string == "postgresql://user:pw@localhost/stories"
    assert db.is_sqlite is False
    kwargs = create_engine.call_args.kwargs
    assert kwargs["pool_pre_ping"] is True
