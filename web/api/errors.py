"""API errors and validation helpers."""

from app.repositories.errors import RecordNotFoundError
from app.services.errors import ServiceError


class NotFoundError(Exception):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


MAX_PAGE = 10_000


def validate_page(page: int) -> None:
    """Validate a 1-based page number."""
    if not isinstance(page, int) or not 1 <= page <= MAX_PAGE:
        raise ValidationError(f"Invalid page: {page}. Must be between 1 and {MAX_PAGE}")


def validate_required(data: dict, *fields: str) -> None:
    """Every named field must be present and non-blank."""
    missing = [f for f in fields if not str(data.get(f) or "").strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def translate_errors(exc: Exception) -> Exception:
    """Map a service/repository error to the API error it surfaces as."""
    if isinstance(exc, RecordNotFoundError):
        return NotFoundError(str(exc))
    if isinstance(exc, ServiceError):
        return ValidationError(str(exc))
    return exc
