"""Domain errors raised by the service layer.

Each error carries the HTTP status and the stable ``code`` that the API
reports, so clients can branch on the category without parsing messages.
"""


class ServiceError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail()
        super().__init__(self.detail)

    @classmethod
    def default_detail(cls) -> str:
        return "Internal server error"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"

    @classmethod
    def default_detail(cls) -> str:
        return "Resource not found"


class ForbiddenError(ServiceError):
    status_code = 403
    code = "forbidden"

    @classmethod
    def default_detail(cls) -> str:
        return "You do not have permission to access this resource"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"

    @classmethod
    def default_detail(cls) -> str:
        return "Resource already exists"


class ValidationFailure(ServiceError):
    status_code = 400
    code = "validation_failed"

    @classmethod
    def default_detail(cls) -> str:
        return "Invalid input"


class InternalFailure(ServiceError):
    pass


def is_unique_violation(exc, constraint_name: str, column: str) -> bool:
    """Tell whether an ``IntegrityError`` was raised by the given unique constraint.

    PostgreSQL reports the constraint name (``diag.constraint_name``); SQLite
    only names the column (``UNIQUE constraint failed: counters.slug``).
    """
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    if getattr(diag, "constraint_name", None) == constraint_name:
        return True

    message = str(orig if orig is not None else exc)
    return constraint_name in message or column in message
