class OnboardingError(Exception):
    """Base error carrying the HTTP status the API answers with."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": self.message}


class Unauthenticated(OnboardingError):
    status_code = 401
    message = "Not authenticated"


class Forbidden(OnboardingError):
    status_code = 403
    message = "Admin access required"


class InvalidCredentials(OnboardingError):
    # Same message for unknown email and wrong password.
    status_code = 401
    message = "Invalid credentials"


class AlreadyExists(OnboardingError):
    status_code = 400
    message = "User already exists"


class ValidationError(OnboardingError):
    status_code = 400
    message = "Invalid request"
