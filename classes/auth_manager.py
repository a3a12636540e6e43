import logging

from utils.errors import InvalidCredentials
from utils.helpers import DEFAULT_HASH_METHOD, verify_password
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both failures cost the same.
_DUMMY_HASH = generate_password_hash("not-a-real-password", method=DEFAULT_HASH_METHOD)


class AuthManager:
    def __init__(self, store):
        self.store = store

    def authenticate(self, email, password):
        """Return the user's public identity or raise InvalidCredentials."""
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentials()

        user = self.store.find_user_by_email(email.strip())
        if user is None:
            verify_password(_DUMMY_HASH, password)
            logger.info("Login failed for %s", email)
            raise InvalidCredentials()

        if not verify_password(user.password_hash, password):
            logger.info("Login failed for %s", email)
            raise InvalidCredentials()

        logger.info("Login succeeded for %s", user.email)
        return user.identity()
