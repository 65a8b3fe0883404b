"""
Application exceptions.

Every error the services raise derives from AppError so the HTTP layer
(api/errors.py) can map it to the uniform error envelope with one handler.
"""
from __future__ import annotations


class AppError(Exception):
    status = 500
    code = "INTERNAL_ERROR"
    message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(AppError):
    """Unknown email or wrong password. Both cases share one message."""
    status = 401
    code = "UNAUTHORIZED"
    message = "Invalid credentials"


class Unauthorized(AppError):
    status = 401
    code = "UNAUTHORIZED"
    message = "Missing or invalid token"


class NotFound(AppError):
    status = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class EmailAlreadyRegistered(AppError):
    status = 409
    code = "CONFLICT"
    message = "Email already registered"


class StoreError(AppError):
    """Any persistence failure. The driver error is chained as __cause__."""
    message = "Storage failure"


# cryptographic failures: fatal to the request, never shown to clients
class HashingError(AppError):
    message = "Password hashing failed"


class SigningError(AppError):
    message = "Token signing failed"


class RandomnessError(AppError):
    message = "Secure random source unavailable"
