"""Anti-forgery tokens bound to the authenticated user.

Tokens are an HMAC of the user id, so they can be re-derived on every
request without server-side storage.
"""

import hashlib
import hmac
from uuid import UUID


class AntiforgeryService:
    """Issue and validate per-user anti-forgery tokens."""

    _PURPOSE = b"platec-antiforgery:"

    def __init__(self, secret_key: str):
        if not secret_key:
            msg = "Anti-forgery secret key cannot be empty"
            raise ValueError(msg)
        self._secret_key = secret_key.encode("utf-8")

    def generate(self, user_id: UUID) -> str:
        message = self._PURPOSE + str(user_id).encode("utf-8")
        return hmac.new(self._secret_key, message, hashlib.sha256).hexdigest()

    def validate(self, user_id: UUID, token: str | None) -> bool:
        if not token:
            return False
        return hmac.compare_digest(self.generate(user_id), token)
