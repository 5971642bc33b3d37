"""Unit tests for IdentityResult, JWTService and AntiforgeryService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from platec_identity import (
    AntiforgeryService,
    IdentityError,
    IdentityResult,
    InvalidTokenError,
    JWTService,
)

SECRET = "unit-test-secret-key-with-enough-length"


class TestIdentityResult:
    def test_success(self):
        result = IdentityResult.success()

        assert result.succeeded
        assert result.errors == ()
        assert result.descriptions == []

    def test_failed_keeps_every_cause(self):
        result = IdentityResult.failed(
            IdentityError("DuplicateUserName", "Username 'a' is already taken."),
            IdentityError("DuplicateEmail", "Email 'a' is already taken."),
        )

        assert not result.succeeded
        assert result.descriptions == [
            "Username 'a' is already taken.",
            "Email 'a' is already taken.",
        ]
        assert result.has_error("DuplicateEmail")
        assert not result.has_error("PasswordTooShort")


class TestJWTService:
    def test_round_trip(self):
        service = JWTService(secret_key=SECRET)
        user_id = uuid4()

        payload = service.verify_token(service.create_access_token(user_id, "a@x.com"))

        assert payload.user_id == user_id
        assert payload.email == "a@x.com"
        assert payload.issued_at <= payload.expires_at
        assert 0 < payload.seconds_left <= 8 * 3600

    def test_access_token_lifetime(self):
        service = JWTService(secret_key=SECRET, access_token_expire_hours=3)

        assert service.access_token_lifetime == timedelta(hours=3)

    def test_expired_token(self):
        service = JWTService(secret_key=SECRET)
        token = service.create_access_token(
            uuid4(),
            "a@x.com",
            expires_delta=timedelta(seconds=-1),
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            service.verify_token(token)

    def test_wrong_secret(self):
        token = JWTService(secret_key=SECRET).create_access_token(uuid4(), "a@x.com")

        with pytest.raises(InvalidTokenError):
            JWTService(secret_key="another-secret-key-of-sufficient-size").verify_token(
                token,
            )

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="")


class TestAntiforgeryService:
    def test_token_is_bound_to_user(self):
        service = AntiforgeryService(SECRET)
        user_id = uuid4()
        token = service.generate(user_id)

        assert service.validate(user_id, token)
        assert not service.validate(uuid4(), token)

    def test_token_is_stable(self):
        service = AntiforgeryService(SECRET)
        user_id = uuid4()

        assert service.generate(user_id) == service.generate(user_id)

    @pytest.mark.parametrize("token", [None, "", "deadbeef"])
    def test_rejects_missing_or_forged(self, token):
        assert not AntiforgeryService(SECRET).validate(uuid4(), token)

    def test_depends_on_secret(self):
        user_id = uuid4()

        assert AntiforgeryService(SECRET).generate(user_id) != AntiforgeryService(
            "a-different-secret",
        ).generate(user_id)
