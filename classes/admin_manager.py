import logging
from datetime import datetime, timezone

from classes.progress_manager import (
    STATUS_COMPLETED, STATUS_IN_PROGRESS, STATUS_NOT_STARTED, onboarding_status
)
from classes.records import ROLE_STAFF
from classes.validators import normalize_email, validate_length, validate_required
from utils.errors import AlreadyExists
from utils.helpers import hash_password

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class AdminManager:
    """Reporting and account creation for administrators."""

    def __init__(self, store):
        self.store = store

    def list_all_progress(self):
        """Every progress record with the owner's name and email attached, newest first."""
        users = {user.id: user for user in self.store.list_users()}
        records = sorted(
            self.store.list_progress(),
            key=lambda r: r.last_updated or _OLDEST,
            reverse=True
        )

        enriched = []
        for record in records:
            user = users.get(record.user_id)
            item = record.to_dict()
            item["userName"] = user.name if user else UNKNOWN
            item["userEmail"] = user.email if user else UNKNOWN
            enriched.append(item)
        return enriched

    def list_users(self):
        return [user.identity() for user in self.store.list_users()]

    def create_user(self, email, password, name):
        """Create a staff account. Admins only come from seeding or the CLI."""
        validate_required({"email": email, "password": password, "name": name},
                          "email", "password", "name")
        email = normalize_email(email)
        name = name.strip()
        validate_length("name", name, 100)

        if self.store.find_user_by_email(email):
            raise AlreadyExists()

        user = self.store.create_user(
            email=email,
            password_hash=hash_password(password),
            name=name,
            role=ROLE_STAFF
        )
        logger.info("Created staff user %s (id %s)", user.email, user.id)
        return {"id": user.id, "email": user.email, "name": user.name}

    def summary(self):
        progress = {record.user_id: record for record in self.store.list_progress()}
        counts = {STATUS_COMPLETED: 0, STATUS_IN_PROGRESS: 0, STATUS_NOT_STARTED: 0}
        staff = [user for user in self.store.list_users() if user.role == ROLE_STAFF]

        for user in staff:
            counts[onboarding_status(progress.get(user.id))] += 1

        return {
            "totalStaff": len(staff),
            "completed": counts[STATUS_COMPLETED],
            "inProgress": counts[STATUS_IN_PROGRESS],
            "notStarted": counts[STATUS_NOT_STARTED],
        }
