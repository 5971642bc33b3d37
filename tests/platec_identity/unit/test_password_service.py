"""Unit tests for PasswordHashingService."""

import pytest

from platec_identity import PasswordHashingService, WeakPasswordError


@pytest.fixture
def service() -> PasswordHashingService:
    return PasswordHashingService(rounds=4)


class TestPasswordHashingService:
    def test_hash_and_verify(self, service):
        password_hash = service.hash("1234")

        assert password_hash != "1234"
        assert service.verify("1234", password_hash)
        assert not service.verify("4321", password_hash)

    def test_short_student_id_is_accepted(self, service):
        # No character classes are required
        service.validate_strength("s001")

    @pytest.mark.parametrize("password", ["", "abc"])
    def test_too_short(self, service, password):
        with pytest.raises(WeakPasswordError) as exc_info:
            service.hash(password)

        assert exc_info.value.code == "PasswordTooShort"
        assert "at least 4 characters" in exc_info.value.message

    def test_too_long_in_bytes(self, service):
        with pytest.raises(WeakPasswordError) as exc_info:
            service.validate_strength("ü" * 40)  # 80 bytes

        assert exc_info.value.code == "PasswordTooLong"

    def test_configurable_minimum(self):
        service = PasswordHashingService(rounds=4, min_length=8)

        with pytest.raises(WeakPasswordError):
            service.validate_strength("1234567")

    def test_verify_with_malformed_hash(self, service):
        assert service.verify("1234", "not-a-bcrypt-hash") is False
