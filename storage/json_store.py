"""users.json / progress.json backend, the format of the legacy file server."""
import json
import logging
import os

from classes.records import ProgressRecord, UserRecord, ROLE_STAFF
from storage.memory_store import MemoryStore
from utils.helpers import format_datetime, parse_datetime

logger = logging.getLogger(__name__)

USERS_FILE = "users.json"
PROGRESS_FILE = "progress.json"


class JsonFileStore(MemoryStore):
    """MemoryStore that loads from and rewrites two JSON files on every change.

    The files are read once at start-up and the lock is per process, so only
    one process may own a data directory. Run a single worker with this
    backend, or use the sqlalchemy backend.
    """

    name = "json"

    def __init__(self, data_dir):
        super().__init__()
        self.data_dir = data_dir
        self.users_path = os.path.join(data_dir, USERS_FILE)
        self.progress_path = os.path.join(data_dir, PROGRESS_FILE)
        self._load()

    def _load(self):
        for raw in self._read(self.users_path):
            user = UserRecord(
                id=raw["id"],
                email=raw["email"],
                password_hash=raw["password"],
                name=raw.get("name", ""),
                role=raw.get("role", ROLE_STAFF),
                created_at=parse_datetime(raw.get("createdAt")),
                updated_at=parse_datetime(raw.get("updatedAt")),
            )
            self._users[user.id] = user
        for raw in self._read(self.progress_path):
            record = ProgressRecord.from_dict(raw)
            self._progress[record.user_id] = record
        logger.debug("Loaded %d users and %d progress records from %s",
                     len(self._users), len(self._progress), self.data_dir)

    @staticmethod
    def _read(path):
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as fh:
            return json.load(fh)

    @staticmethod
    def _write(path, payload):
        tmp_path = path + ".tmp"
        with open(tmp_path, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2)
        os.replace(tmp_path, path)

    def _save_users(self):
        os.makedirs(self.data_dir, exist_ok=True)
        self._write(self.users_path, [
            {
                "id": user.id,
                "email": user.email,
                "password": user.password_hash,
                "name": user.name,
                "role": user.role,
                "createdAt": format_datetime(user.created_at),
                "updatedAt": format_datetime(user.updated_at),
            }
            for user in (self._users[uid] for uid in sorted(self._users))
        ])

    def _save_progress(self):
        os.makedirs(self.data_dir, exist_ok=True)
        self._write(self.progress_path, [
            record.to_dict() for record in self._progress.values()
        ])

    def upsert_progress(self, record):
        with self._lock:
            stored = super().upsert_progress(record)
            self._save_progress()
            return stored

    def create_progress_if_absent(self, record):
        with self._lock:
            existed = record.user_id in self._progress
            stored = super().create_progress_if_absent(record)
            if not existed:
                self._save_progress()
            return stored

    def create_user(self, email, password_hash, name, role):
        with self._lock:
            user = super().create_user(email, password_hash, name, role)
            self._save_users()
            return user
