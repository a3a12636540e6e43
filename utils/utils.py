import logging
from functools import wraps
from flask import current_app, g, session

from classes.records import ROLE_ADMIN
from utils.errors import Forbidden, Unauthenticated
from utils.helpers import format_datetime, parse_datetime, utcnow

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user"
SESSION_EXPIRES_KEY = "expires_at"


def start_session(identity):
    """Bind an identity to the session for a fixed window; never renewed."""
    session.clear()
    session.permanent = True
    session[SESSION_USER_KEY] = dict(identity)
    expires_at = utcnow() + current_app.permanent_session_lifetime
    session[SESSION_EXPIRES_KEY] = format_datetime(expires_at)
    # New id on login; a session id planted before login is dropped.
    current_app.session_interface.regenerate(session)


def end_session():
    session.clear()


def current_identity():
    """The session's identity, or None when absent or expired."""
    identity = session.get(SESSION_USER_KEY)
    if not identity:
        return None

    expires_at = parse_datetime(session.get(SESSION_EXPIRES_KEY))
    if expires_at is None or expires_at <= utcnow():
        logger.info("Session for user %s expired", identity.get("id"))
        session.clear()
        return None
    return identity


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        identity = current_identity()
        if not identity:
            raise Unauthenticated()

        g.user = identity
        return f(*args, **kwargs)

    return decorated_function


def admin_required(f):
    @login_required
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if g.user.get("role") != ROLE_ADMIN:
            logger.warning("User %s denied admin access", g.user.get("id"))
            raise Forbidden()

        return f(*args, **kwargs)

    return decorated_function
