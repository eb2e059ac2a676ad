from __future__ import annotations


class AuthError(Exception):
    status_code = 400
    message = "Authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidCredentials(AuthError):
    message = "Invalid login credentials"


class EmailUnconfirmed(AuthError):
    message = "Email not confirmed"


class RateLimited(AuthError):
    status_code = 429
    message = "Too many requests"


class AlreadyRegistered(AuthError):
    status_code = 422
    message = "User already registered"


class WeakPassword(AuthError):
    status_code = 422
    message = "Password should be at least 6 characters"


class InvalidEmail(AuthError):
    status_code = 422
    message = "Unable to validate email address: invalid format"


class NotAuthenticated(AuthError):
    status_code = 401
    message = "Missing or expired session"


class StoreError(Exception):
    status_code = 500
    message = "Store operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class NotFound(StoreError):
    status_code = 404
    message = "Row not found"
