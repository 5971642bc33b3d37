"""UserDirectorySQLAlchemy against an in-memory SQLite database."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from sqlalchemy import select

from platec.domain.shared.time import utc_now
from platec_identity import PasswordHashingService, Role, User
from platec_identity.infrastructure.persistence.sqlalchemy import (
    UserCredentialModel,
    UserCredentialRepositorySQLAlchemy,
    UserDirectorySQLAlchemy,
)


@pytest.fixture
def password_service() -> PasswordHashingService:
    return PasswordHashingService(rounds=4)


@pytest.fixture
def directory(db_session, password_service) -> UserDirectorySQLAlchemy:
    return UserDirectorySQLAlchemy(db_session, password_service)


@pytest.fixture
async def roles(directory):
    for role in Role:
        await directory.create_role(role)


class TestCreate:
    async def test_create_and_find(self, directory, db_session, password_service):
        user = User.create("t1@x.com", first_name="A", last_name="B")

        result = await directory.create(user, "1234")
        await db_session.commit()

        assert result.succeeded
        found = await directory.find_by_id(str(user.id))
        assert found == user
        assert found.user_name == "t1@x.com"
        assert (found.first_name, found.last_name) == ("A", "B")
        assert await directory.find_by_email("T1@X.com") == user

        credential = await UserCredentialRepositorySQLAlchemy(db_session).find_by_user_id(
            user.id,
        )
        assert credential.password_hash != "1234"
        assert password_service.verify("1234", credential.password_hash)

    async def test_duplicate_email_reports_both_causes(self, directory, db_session):
        await directory.create(User.create("t1@x.com"), "1234")
        await db_session.commit()

        result = await directory.create(User.create("t1@x.com"), "5678")

        assert not result.succeeded
        assert result.has_error("DuplicateEmail")
        assert result.has_error("DuplicateUserName")
        assert "Email 't1@x.com' is already taken." in result.descriptions
        assert len(await directory.list_all()) == 1

    async def test_password_policy_violation(self, directory):
        result = await directory.create(User.create("t1@x.com"), "123")

        assert not result.succeeded
        assert result.has_error("PasswordTooShort")
        assert await directory.find_by_email("t1@x.com") is None

    async def test_all_causes_are_collected(self, directory, db_session):
        await directory.create(User.create("t1@x.com"), "1234")
        await db_session.commit()

        result = await directory.create(User.create("t1@x.com"), "1")

        assert {e.code for e in result.errors} == {
            "DuplicateEmail",
            "DuplicateUserName",
            "PasswordTooShort",
        }

    async def test_invalid_username_characters(self, db_session, password_service):
        directory = UserDirectorySQLAlchemy(
            db_session,
            password_service,
            allowed_user_name_characters="abcdefghijklmnopqrstuvwxyz",
        )

        result = await directory.create(User.create("t1@x.com"), "1234")

        assert result.has_error("InvalidUserName")

    async def test_unique_constraint_race_becomes_failure(self, directory, db_session):
        await directory.create(User.create("t1@x.com"), "1234")
        await db_session.commit()

        # A concurrent request passed the duplicate check before the first commit
        with patch.object(directory, "_find_duplicates", AsyncMock(return_value=[])):
            result = await directory.create(User.create("t1@x.com"), "1234")

        assert not result.succeeded
        assert result.has_error("DuplicateEmail")
        assert len(await directory.list_all()) == 1

    async def test_lost_race_keeps_earlier_uncommitted_work(self, directory, db_session):
        await directory.create(User.create("a@x.com"), "1234")
        await db_session.commit()
        await directory.create_role(Role.TEACHER)

        with patch.object(directory, "_find_duplicates", AsyncMock(return_value=[])):
            result = await directory.create(User.create("a@x.com"), "1234")

        assert result.has_error("DuplicateEmail")
        assert await directory.role_exists(Role.TEACHER)
        await db_session.commit()
        assert await directory.role_exists(Role.TEACHER)
        assert len(await directory.list_all()) == 1


class TestLookups:
    @pytest.mark.parametrize("user_id", [None, "", "not-a-uuid"])
    async def test_find_by_unparseable_id(self, directory, user_id):
        assert await directory.find_by_id(user_id) is None

    async def test_find_by_unknown_id(self, directory):
        assert await directory.find_by_id(uuid4()) is None

    async def test_find_by_malformed_email(self, directory):
        assert await directory.find_by_email("nonsense") is None


class TestUpdate:
    async def test_update_profile(self, directory, db_session):
        user = User.create("old@x.com", first_name="O", last_name="P")
        await directory.create(user, "1234")
        await db_session.commit()

        user.change_profile("new@x.com", "N", "M")
        result = await directory.update(user)
        await db_session.commit()

        assert result.succeeded
        found = await directory.find_by_id(user.id)
        assert found.email == "new@x.com"
        assert found.user_name == "new@x.com"
        assert await directory.find_by_email("old@x.com") is None

    async def test_update_keeping_own_email(self, directory, db_session):
        user = User.create("t1@x.com")
        await directory.create(user, "1234")
        await db_session.commit()

        user.change_profile("t1@x.com", "New", "Name")

        assert (await directory.update(user)).succeeded

    async def test_update_to_taken_email(self, directory, db_session):
        first = User.create("a@x.com")
        second = User.create("b@x.com")
        await directory.create(first, "1234")
        await directory.create(second, "1234")
        await db_session.commit()

        second.change_profile("a@x.com", "", "")
        result = await directory.update(second)

        assert result.has_error("DuplicateEmail")

    async def test_update_race_keeps_earlier_uncommitted_work(self, directory, db_session):
        first = User.create("a@x.com")
        second = User.create("b@x.com")
        await directory.create(first, "1234")
        await directory.create(second, "1234")
        await db_session.commit()
        await directory.create_role(Role.ADMIN)

        second.change_profile("a@x.com", "", "")
        with patch.object(directory, "_find_duplicates", AsyncMock(return_value=[])):
            result = await directory.update(second)

        assert result.has_error("DuplicateEmail")
        await db_session.commit()
        assert await directory.role_exists(Role.ADMIN)
        assert (await directory.find_by_id(second.id)).email == "b@x.com"

    async def test_update_missing_user(self, directory):
        result = await directory.update(User.create("ghost@x.com"))

        assert result.has_error("ConcurrencyFailure")


class TestDelete:
    async def test_delete_removes_user_roles_and_credentials(
        self,
        directory,
        db_session,
        roles,
    ):
        user = User.create("t1@x.com")
        await directory.create(user, "1234")
        await directory.add_to_role(user, Role.TEACHER)
        await db_session.commit()

        result = await directory.delete(user)
        await db_session.commit()

        assert result.succeeded
        assert await directory.find_by_id(user.id) is None
        assert await directory.get_users_in_role(Role.TEACHER) == []
        credentials = UserCredentialRepositorySQLAlchemy(db_session)
        assert await credentials.find_by_user_id(user.id) is None

    async def test_delete_missing_user(self, directory):
        result = await directory.delete(User.create("ghost@x.com"))

        assert not result.succeeded


class TestRoles:
    async def test_create_role_once(self, directory):
        assert not await directory.role_exists(Role.ADMIN)

        assert (await directory.create_role(Role.ADMIN)).succeeded
        assert await directory.role_exists(Role.ADMIN)

        repeat = await directory.create_role(Role.ADMIN)
        assert repeat.has_error("DuplicateRoleName")

    async def test_add_to_missing_role(self, directory):
        user = User.create("t1@x.com")
        await directory.create(user, "1234")

        result = await directory.add_to_role(user, Role.TEACHER)

        assert result.has_error("RoleNotFound")

    async def test_add_to_role_twice(self, directory, roles):
        user = User.create("t1@x.com")
        await directory.create(user, "1234")

        assert (await directory.add_to_role(user, Role.TEACHER)).succeeded
        assert (await directory.add_to_role(user, Role.TEACHER)).has_error(
            "UserAlreadyInRole",
        )

    async def test_membership_queries(self, directory, roles):
        teacher = User.create("t1@x.com")
        admin = User.create("admin@x.com")
        loner = User.create("loner@x.com")
        for user in (teacher, admin, loner):
            await directory.create(user, "1234")
        await directory.add_to_role(teacher, Role.TEACHER)
        await directory.add_to_role(admin, Role.ADMIN)
        await directory.add_to_role(admin, Role.TEACHER)

        assert await directory.get_users_in_role(Role.TEACHER) == [teacher, admin]
        assert await directory.get_users_in_role(Role.STUDENT) == []
        assert await directory.get_roles(admin) == [Role.ADMIN, Role.TEACHER]
        assert await directory.get_roles(loner) == []
        assert await directory.list_all() == [teacher, admin, loner]


class TestLockout:
    async def test_locks_after_max_failed_attempts(self, db_session, password_service):
        directory = UserDirectorySQLAlchemy(db_session, password_service)
        user = User.create("t1@x.com")
        await directory.create(user, "1234")
        credentials = UserCredentialRepositorySQLAlchemy(
            db_session,
            max_failed_attempts=5,
            lockout_duration_minutes=5,
        )

        for _ in range(4):
            await credentials.increment_failed_attempts(user.id)
        assert (await credentials.is_account_locked(user.id))[0] is False

        await credentials.increment_failed_attempts(user.id)
        locked, locked_until = await credentials.is_account_locked(user.id)

        assert locked is True
        assert locked_until is not None

        await credentials.reset_failed_attempts(user.id)
        assert (await credentials.is_account_locked(user.id))[0] is False

    async def test_expired_lock_allows_fresh_attempts(self, db_session, password_service):
        directory = UserDirectorySQLAlchemy(db_session, password_service)
        user = User.create("t1@x.com")
        await directory.create(user, "1234")
        credentials = UserCredentialRepositorySQLAlchemy(
            db_session,
            max_failed_attempts=5,
            lockout_duration_minutes=5,
        )
        for _ in range(5):
            await credentials.increment_failed_attempts(user.id)
        assert (await credentials.find_by_user_id(user.id)).failed_login_attempts == 0

        model = (
            await db_session.execute(
                select(UserCredentialModel).where(UserCredentialModel.user_id == user.id),
            )
        ).scalar_one()
        model.locked_until = utc_now() - timedelta(seconds=1)
        await db_session.flush()
        assert (await credentials.is_account_locked(user.id))[0] is False

        assert await credentials.increment_failed_attempts(user.id) == 1
        assert (await credentials.is_account_locked(user.id))[0] is False

        for _ in range(4):
            await credentials.increment_failed_attempts(user.id)
        assert (await credentials.is_account_locked(user.id))[0] is True
