"""Exceptions raised by platec_identity services.

Callers in the platec API translate them into 401/423 responses or, for
WeakPasswordError, into IdentityError entries of a failed IdentityResult.
"""

from datetime import datetime


class AuthError(Exception):
    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Access token is expired, tampered with or unreadable."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Password violates the length policy.

    ``code`` is the IdentityError code to report (``PasswordTooShort`` or
    ``PasswordTooLong``).
    """

    def __init__(self, message: str, code: str):
        self.code = code
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Unknown email or wrong password. Callers must not say which."""

    def __init__(self):
        super().__init__("Invalid email or password")


class AccountLockedError(AuthError):
    """Login refused while ``locked_until`` lies in the future."""

    def __init__(self, locked_until: datetime | None = None):
        self.locked_until = locked_until
        message = "Account is locked due to too many failed login attempts"
        if locked_until is not None:
            message = f"{message}. Try again after {locked_until.isoformat()}"
        super().__init__(message)
