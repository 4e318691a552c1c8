"""Errors raised by the service layer and mapped to HTTP responses in main."""


class ServiceError(Exception):
    """Base class for service-layer failures."""


class ValidationError(ServiceError):
    """Malformed input or a uniqueness violation."""


class InvalidCredentials(ServiceError):
    """Login email/password mismatch."""


class Unauthorized(ServiceError):
    """Missing, invalid or revoked session token."""


class NotFound(ServiceError):
    """Absent id, malformed id, or a record owned by another user."""


class InvalidToken(Unauthorized):
    """Token signature or payload does not verify."""
