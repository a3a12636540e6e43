"""Shared fixtures: a testing app on in-memory SQLite with the default accounts."""
import pytest

from app import create_app
from classes.records import ROLE_ADMIN, ROLE_STAFF
from manage import seed_default_users
from models import db
from storage.factory import get_store
from storage.json_store import JsonFileStore
from storage.memory_store import MemoryStore
from storage.sql_store import SqlAlchemyStore
from werkzeug.security import generate_password_hash

ADMIN = {"email": "admin@maytech.com", "password": "admin123"}
STAFF = {"email": "staff@maytech.com", "password": "staff123"}


@pytest.fixture
def app(tmp_path):
    app = create_app("testing", SESSION_FILE_DIR=str(tmp_path / "sessions"))
    with app.app_context():
        db.create_all()
        seed_default_users(get_store())
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    assert client.post("/api/login", json=ADMIN).status_code == 200
    return client


@pytest.fixture
def staff_client(app):
    client = app.test_client()
    assert client.post("/api/login", json=STAFF).status_code == 200
    return client


@pytest.fixture(params=["memory", "json", "sqlalchemy"])
def store(request, tmp_path):
    """Each backend with one admin (id 1) and one staff user (id 2)."""
    if request.param == "sqlalchemy":
        app = create_app("testing", SESSION_FILE_DIR=str(tmp_path / "sessions"))
        with app.app_context():
            db.create_all()
            backend = SqlAlchemyStore()
            _add_users(backend)
            yield backend
            db.session.remove()
            db.drop_all()
        return

    backend = MemoryStore() if request.param == "memory" else JsonFileStore(str(tmp_path / "data"))
    _add_users(backend)
    yield backend


def _add_users(store):
    store.create_user("admin@example.com", generate_password_hash("secret", method="pbkdf2:sha256:1000"), "Ada Admin", ROLE_ADMIN)
    store.create_user("staff@example.com", generate_password_hash("secret", method="pbkdf2:sha256:1000"), "Sam Staff", ROLE_STAFF)
