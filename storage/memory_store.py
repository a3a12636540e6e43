import threading
from dataclasses import replace

from classes.records import UserRecord
from storage.base import OnboardingStore
from utils.errors import AlreadyExists
from utils.helpers import utcnow


class MemoryStore(OnboardingStore):
    """Process-local store; contents vanish with the process."""

    name = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self._users = {}
        self._progress = {}

    def get_progress(self, user_id):
        with self._lock:
            record = self._progress.get(user_id)
            return record.copy() if record else None

    def upsert_progress(self, record):
        with self._lock:
            self._progress[record.user_id] = record.copy()
            return record.copy()

    def create_progress_if_absent(self, record):
        with self._lock:
            existing = self._progress.get(record.user_id)
            if existing is None:
                existing = self._progress[record.user_id] = record.copy()
            return existing.copy()

    def list_progress(self):
        with self._lock:
            return [record.copy() for record in self._progress.values()]

    def get_user(self, user_id):
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def find_user_by_email(self, email):
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
            return None

    def list_users(self):
        with self._lock:
            return [replace(self._users[uid]) for uid in sorted(self._users)]

    def create_user(self, email, password_hash, name, role):
        with self._lock:
            if any(user.email == email for user in self._users.values()):
                raise AlreadyExists()
            now = utcnow()
            user = UserRecord(
                id=max(self._users, default=0) + 1,
                email=email,
                password_hash=password_hash,
                name=name,
                role=role,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return replace(user)
