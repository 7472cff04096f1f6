"""Service errors - business rules refused by a service."""


class ServiceError(Exception):
    """Base class for service errors."""


class MissingFieldError(ServiceError):
    """A required input field is empty."""


class ConflictError(ServiceError):
    """The operation would break a reference held by other records."""
