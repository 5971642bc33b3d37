"""Password hashing service using bcrypt.

Provides secure password hashing and verification with a configurable
length policy.
"""

import bcrypt

from platec_identity.exceptions import WeakPasswordError


class PasswordHashingService:
    """Service for secure password hashing and verification.

    Uses bcrypt for password hashing with configurable work factor.
    The policy only constrains length so that short student ids can be
    used as initial passwords.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> hash = service.hash("1234")
    >>> service.verify("1234", hash)
    True
    >>> service.verify("wrong_password", hash)
    False
    """

    MIN_LENGTH = 4
    MAX_LENGTH = 72  # bcrypt input limit (bytes)

    def __init__(
        self,
        rounds: int = 12,
        min_length: int = MIN_LENGTH,
        max_length: int = MAX_LENGTH,
    ):
        """Initialize the password hashing service.

        Parameters
        ----------
        rounds
            The bcrypt work factor (log2 of iterations).
        min_length
            Minimum accepted password length.
        max_length
            Maximum accepted password length.
        """
        self._rounds = rounds
        self._min_length = min_length
        self._max_length = max_length

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash."""
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def validate_strength(self, password: str) -> None:
        """Validate that a password meets the length policy.

        Raises
        ------
        WeakPasswordError
            If password doesn't meet requirements
        """
        if not password or len(password) < self._min_length:
            msg = f"Passwords must be at least {self._min_length} characters."
            raise WeakPasswordError(msg, code="PasswordTooShort")

        if len(password.encode("utf-8")) > self._max_length:
            msg = f"Passwords cannot exceed {self._max_length} characters."
            raise WeakPasswordError(msg, code="PasswordTooLong")
