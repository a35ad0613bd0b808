"""Error kinds raised by the service layer.

Handlers in ``prephub.main`` turn these into ``{"error", "code"}`` JSON
responses; nothing below the routers knows about HTTP status codes.
"""


class AppError(Exception):
    status_code = 500
    code = "internal"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input"


class DuplicateEmail(AppError):
    status_code = 400
    code = "duplicate_email"
    default_message = "Email already registered"


class Conflict(AppError):
    status_code = 400
    code = "conflict"
    default_message = "Already exists"


class InvalidRole(AppError):
    status_code = 400
    code = "invalid_role"
    default_message = "Invalid role"


class SelfModificationForbidden(AppError):
    status_code = 400
    code = "self_modification_forbidden"
    default_message = "Cannot modify your own account"


class Unauthenticated(AppError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Login required"


class InvalidCredentials(AppError):
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class InvalidOrExpiredToken(AppError):
    status_code = 403
    code = "invalid_token"
    default_message = "Invalid or expired token"


class Forbidden(AppError):
    status_code = 403
    code = "forbidden"
    default_message = "Admin only"


class NotFound(AppError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class Internal(AppError):
    pass
