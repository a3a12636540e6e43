from datetime import datetime, timezone
import bcrypt
from flask import current_app, has_app_context, request
from werkzeug.security import check_password_hash, generate_password_hash

DEFAULT_HASH_METHOD = "pbkdf2:sha256"


def utcnow():
    return datetime.now(timezone.utc)


def format_datetime(datetime_obj):
    """Format datetime to an ISO-8601 string (UTC when naive)."""
    if not datetime_obj:
        return None
    if datetime_obj.tzinfo is None:
        datetime_obj = datetime_obj.replace(tzinfo=timezone.utc)
    return datetime_obj.isoformat()


def parse_datetime(value):
    """Parse an ISO-8601 string as written by format_datetime or a JS client."""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        # datetime.fromisoformat does not accept a trailing "Z" before 3.11
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def hash_password(password):
    """Salted one-way hash using the app's PASSWORD_HASH_METHOD when available."""
    method = DEFAULT_HASH_METHOD
    if has_app_context():
        method = current_app.config.get("PASSWORD_HASH_METHOD", DEFAULT_HASH_METHOD)
    return generate_password_hash(password, method=method)


def verify_password(password_hash, password):
    """Check a password against a werkzeug hash or a legacy bcrypt ($2a$/$2b$) hash."""
    if password_hash.startswith("$2"):
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
    return check_password_hash(password_hash, password)


def json_body():
    """The request's JSON object, or {} when the body is missing, malformed or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
