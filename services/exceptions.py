"""
Application errors

Every error carries a human-readable message meant for direct display and
the HTTP status the API answers with.
"""


class AppError(Exception):
    """Base class for errors surfaced to the user"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DataAccessError(AppError):
    """The store rejected or failed a request (network, permission, constraint)"""

    status_code = 502


class NotFoundError(AppError):
    status_code = 404


class PermissionDeniedError(AppError):
    status_code = 403


class AuthenticationError(AppError):
    status_code = 401


class ValidationError(AppError):
    """Input rejected before any request reaches the store"""

    status_code = 422


class ConfigurationError(AppError):
    status_code = 500
