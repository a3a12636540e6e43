"""Backend-specific behaviour not covered by the engine tests."""
import json

import bcrypt
import pytest
from sqlalchemy.exc import IntegrityError

from app import create_app
from classes.auth_manager import AuthManager
from classes.progress_manager import ProgressManager
from classes.records import ProgressRecord
from models import db
from models.progress import ProgressRecordModel
from models.users import User
from storage.factory import build_store
from storage.json_store import JsonFileStore
from storage.memory_store import MemoryStore
from storage.sql_store import SqlAlchemyStore
from utils.errors import AlreadyExists, InvalidCredentials


class TestStoreContract:
    def test_duplicate_email_rejected(self, store):
        before = store.list_users()
        with pytest.raises(AlreadyExists):
            store.create_user("staff@example.com", "hash", "Other", "staff")
        assert store.list_users() == before

    def test_ids_increment(self, store):
        user = store.create_user("third@example.com", "hash", "Third", "staff")
        assert user.id == 3
        assert store.get_user(3).email == "third@example.com"

    def test_lookup_misses(self, store):
        assert store.get_user(42) is None
        assert store.find_user_by_email("nobody@example.com") is None
        assert store.get_progress(42) is None

    def test_returned_records_are_detached(self, store):
        record = ProgressManager(store).acknowledge_section(2, 0, True)
        record.sections.clear()
        assert 0 in store.get_progress(2).sections


class TestJsonFileStore:
    def test_survives_reload(self, tmp_path):
        data_dir = str(tmp_path / "data")
        store = JsonFileStore(data_dir)
        store.create_user("a@example.com", "hash", "A", "staff")
        ProgressManager(store).acknowledge_section(1, 4, True)

        reloaded = JsonFileStore(data_dir)
        assert reloaded.find_user_by_email("a@example.com").id == 1
        record = reloaded.get_progress(1)
        assert record.completed_sections == 1
        assert record.sections[4].acknowledged is True

    def test_reads_legacy_files(self, tmp_path):
        legacy_hash = bcrypt.hashpw(b"admin123", bcrypt.gensalt(rounds=4)).decode()
        (tmp_path / "users.json").write_text(json.dumps([
            {"id": 1, "email": "admin@maytech.com", "password": legacy_hash, "name": "Admin User", "role": "admin"},
        ]))
        (tmp_path / "progress.json").write_text(json.dumps([
            {"userId": 1, "userName": "Admin User", "sections": [
                {"id": 0, "acknowledged": True, "completedAt": "2025-01-02T03:04:05.000Z"}],
             "currentSection": 1, "completedSections": 1, "lastUpdated": "2025-01-02T03:04:05.000Z"},
        ]))

        store = JsonFileStore(str(tmp_path))
        assert store.get_progress(1).sections[0].completed_at.year == 2025
        identity = AuthManager(store).authenticate("admin@maytech.com", "admin123")
        assert identity["role"] == "admin"
        with pytest.raises(InvalidCredentials):
            AuthManager(store).authenticate("admin@maytech.com", "wrong")

    def test_password_hash_key_is_legacy_compatible(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.create_user("a@example.com", "hash", "A", "staff")

        written = json.loads((tmp_path / "users.json").read_text())
        assert written[0]["password"] == "hash"

    def test_instances_do_not_see_each_others_writes(self, tmp_path):
        first = JsonFileStore(str(tmp_path))
        second = JsonFileStore(str(tmp_path))
        first.create_user("a@example.com", "hash", "A", "staff")

        # Files are only read at start-up: one process per data directory.
        assert second.find_user_by_email("a@example.com") is None
        assert JsonFileStore(str(tmp_path)).find_user_by_email("a@example.com").id == 1


def _commit_behind_competitor(monkeypatch, competitor):
    """The next commit loses to ``competitor``, committed just before it."""
    real_commit = db.session.commit

    def losing_commit():
        monkeypatch.setattr(db.session, "commit", real_commit)
        db.session.rollback()
        db.session.add(competitor)
        real_commit()
        raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(db.session, "commit", losing_commit)


class TestSqlAlchemyStoreConflicts:
    def test_concurrent_first_read_returns_the_winning_row(self, app, monkeypatch):
        with app.app_context():
            winner = ProgressRecordModel(
                user_id=2,
                sections=[{"id": 0, "acknowledged": True, "completedAt": None}],
                current_section=1,
                completed_sections=1,
            )
            _commit_behind_competitor(monkeypatch, winner)

            record = SqlAlchemyStore().create_progress_if_absent(ProgressRecord.fresh(2))

            assert record.completed_sections == 1
            assert record.sections[0].acknowledged is True
            assert ProgressRecordModel.query.count() == 1

    def test_concurrent_duplicate_email_is_already_exists(self, app, monkeypatch):
        with app.app_context():
            winner = User(email="new@example.com", password_hash="hash", name="First", role="staff")
            _commit_behind_competitor(monkeypatch, winner)

            with pytest.raises(AlreadyExists):
                SqlAlchemyStore().create_user("new@example.com", "hash", "Second", "staff")

            assert User.query.filter_by(email="new@example.com").one().name == "First"
            assert User.query.count() == 3


class TestBuildStore:
    @pytest.mark.parametrize("backend,expected", [
        ("sqlalchemy", SqlAlchemyStore),
        ("memory", MemoryStore),
        ("json", JsonFileStore),
    ])
    def test_backends(self, tmp_path, backend, expected):
        store = build_store({"STORAGE_BACKEND": backend, "DATA_DIR": str(tmp_path)})
        assert isinstance(store, expected)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_store({"STORAGE_BACKEND": "redis"})

    def test_app_accepts_injected_store(self, tmp_path):
        store = MemoryStore()
        app = create_app("testing", store=store, SESSION_FILE_DIR=str(tmp_path))
        assert app.extensions["onboarding_store"] is store
