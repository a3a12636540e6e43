"""Storage interface shared by the SQL, in-memory and JSON-file backends."""
from abc import ABC, abstractmethod


class OnboardingStore(ABC):
    """Users and progress records, related one-to-one by user id.

    Implementations return and accept ``classes.records`` types only and must
    keep at most one progress record per user id.
    """

    name = "abstract"

    @abstractmethod
    def get_progress(self, user_id):
        """Return the ProgressRecord for ``user_id`` or ``None``."""

    @abstractmethod
    def upsert_progress(self, record):
        """Insert or replace the user's record; return what was stored."""

    @abstractmethod
    def create_progress_if_absent(self, record):
        """Store ``record`` unless one exists; return whichever is stored."""

    @abstractmethod
    def list_progress(self):
        """Return every ProgressRecord."""

    @abstractmethod
    def get_user(self, user_id):
        """Return the UserRecord for ``user_id`` or ``None``."""

    @abstractmethod
    def find_user_by_email(self, email):
        """Return the UserRecord for ``email`` or ``None``."""

    @abstractmethod
    def list_users(self):
        """Return every UserRecord ordered by id."""

    @abstractmethod
    def create_user(self, email, password_hash, name, role):
        """Create and return a UserRecord.

        Raises ``AlreadyExists`` when the email is taken.
        """

    def count_users(self):
        return len(self.list_users())

    def count_progress(self):
        return len(self.list_progress())
