from classes.records import LAST_SECTION
from utils.errors import ValidationError


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValidationError(f"{field_name} must be {max_length} characters or fewer.")


def validate_required(data, *fields):
    missing = [name for name in fields if not isinstance(data.get(name), str) or not data.get(name).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_section_id(section_id):
    # bool is an int subclass; True must not pass as section 1.
    if isinstance(section_id, bool) or not isinstance(section_id, int):
        raise ValidationError("sectionId must be an integer")
    if section_id < 0 or section_id > LAST_SECTION:
        raise ValidationError(f"sectionId must be between 0 and {LAST_SECTION}")
    return section_id


def validate_acknowledged(acknowledged):
    if not isinstance(acknowledged, bool):
        raise ValidationError("acknowledged must be a boolean")
    return acknowledged


def normalize_email(email):
    email = (email or "").strip()
    if "@" not in email:
        raise ValidationError("A valid email is required")
    validate_length("email", email, 255)
    return email
