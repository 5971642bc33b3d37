"""Teacher account lifecycle: list, create, view, edit and delete."""

import html
import logging
from typing import Union
from uuid import UUID

from platec.application.dtos import (
    FlashMessage,
    TeacherCreationResult,
    TeacherForm,
    TeacherProfile,
)
from platec.application.ports import NotificationSender
from platec.domain.teacher import TeacherNotFoundError, TeacherValidationError
from platec_identity import (
    IdentityResult,
    InvalidEmailError,
    Role,
    User,
    UserDirectory,
)

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Your Teacher Account Credentials"

WELCOME_HTML = """
<h2>Welcome to {app_name}</h2>
<p>Your teacher account has been created successfully.</p>
<p><strong>Login Details:</strong></p>
<ul>
    <li>Email: {email}</li>
    <li>Password: {password}</li>
</ul>
<p>Please change your password after first login.</p>
<p>Best regards,<br>{app_name} Team</p>
"""

MSG_CREATED_EMAILED = (
    "Teacher created successfully. Login credentials have been sent to {email}."
)
MSG_CREATED_FALLBACK = "Teacher created successfully. Login: {email}, Password: {password}."
MSG_UPDATED = "Teacher updated successfully."
MSG_DELETED = "Teacher deleted successfully."
MSG_DELETE_FAILED = "Failed to delete teacher."

TeacherId = Union[str, UUID, None]


class TeacherLifecycleService:
    """Orchestrates teacher accounts against the user directory.

    The caller is expected to have passed the Admin role check already.
    Nothing is committed here; the session owner commits after a
    successful call and rolls back when one raises.
    """

    def __init__(
        self,
        user_directory: UserDirectory,
        notification_sender: NotificationSender,
        app_name: str = "ProjectPlatec",
    ):
        self._directory = user_directory
        self._notifications = notification_sender
        self._app_name = app_name

    async def list_teachers(self) -> list[User]:
        return await self._directory.get_users_in_role(Role.TEACHER)

    async def create_teacher(self, form: TeacherForm) -> TeacherCreationResult:
        """Create a teacher account and deliver its credentials.

        Parameters
        ----------
        form
            Registration data. The username is set to the email address.

        Returns
        -------
        TeacherCreationResult
            The new teacher and the flash message for the list view.

        Raises
        ------
        TeacherValidationError
            If the directory rejects the account (duplicate email, password
            policy, ...). No user is created in that case.
        """
        try:
            teacher = User.create(
                email=form.email,
                first_name=form.first_name,
                last_name=form.last_name,
            )
        except InvalidEmailError as e:
            raise TeacherValidationError([str(e)]) from e

        result = await self._directory.create(teacher, form.password)
        self._raise_if_failed(result)
        logger.info("Teacher account created: %s", teacher.id)

        role_result = await self._directory.add_to_role(teacher, Role.TEACHER)
        if not role_result.succeeded:
            logger.error(
                "Could not assign Teacher role to %s: %s",
                teacher.id,
                "; ".join(role_result.descriptions),
            )

        try:
            await self._notifications.send_email(
                teacher.email,
                WELCOME_SUBJECT,
                WELCOME_HTML.format(
                    app_name=html.escape(self._app_name),
                    email=html.escape(teacher.email),
                    password=html.escape(form.password),
                ),
            )
        except Exception:
            logger.exception("Failed to send credentials email to %s", teacher.email)
            # The account stays; the admin gets the credentials instead
            logger.warning(
                "Disclosing credentials of %s to the administrator", teacher.id
            )
            return TeacherCreationResult(
                teacher=teacher,
                flash=FlashMessage.success(
                    MSG_CREATED_FALLBACK.format(
                        email=teacher.email, password=form.password
                    )
                ),
                credentials_emailed=False,
            )

        return TeacherCreationResult(
            teacher=teacher,
            flash=FlashMessage.success(MSG_CREATED_EMAILED.format(email=teacher.email)),
            credentials_emailed=True,
        )

    async def get_teacher(self, teacher_id: TeacherId) -> User:
        """Fetch one account for display. Raises TeacherNotFoundError."""
        return await self._find_or_raise(teacher_id)

    async def get_edit_form(self, teacher_id: TeacherId) -> TeacherProfile:
        teacher = await self._find_or_raise(teacher_id)
        return TeacherProfile.from_user(teacher)

    async def update_teacher(
        self,
        teacher_id: TeacherId,
        profile: TeacherProfile,
    ) -> FlashMessage:
        """Overwrite email, username and names. The password is untouched."""
        teacher = await self._find_or_raise(teacher_id)

        try:
            teacher.change_profile(
                email=profile.email,
                first_name=profile.first_name,
                last_name=profile.last_name,
            )
        except InvalidEmailError as e:
            raise TeacherValidationError([str(e)]) from e

        result = await self._directory.update(teacher)
        self._raise_if_failed(result)

        logger.info("Teacher account updated: %s", teacher.id)
        return FlashMessage.success(MSG_UPDATED)

    async def get_delete_confirmation(self, teacher_id: TeacherId) -> User:
        return await self._find_or_raise(teacher_id)

    async def delete_teacher(self, teacher_id: TeacherId) -> FlashMessage | None:
        """Delete the account if it exists.

        Returns None when there was nothing to delete.
        """
        teacher = await self._directory.find_by_id(teacher_id)
        if teacher is None:
            logger.debug("Delete requested for unknown teacher %s", teacher_id)
            return None

        result = await self._directory.delete(teacher)
        if not result.succeeded:
            logger.warning(
                "Failed to delete teacher %s: %s",
                teacher.id,
                "; ".join(result.descriptions),
            )
            return FlashMessage.error(MSG_DELETE_FAILED)

        logger.info("Teacher account deleted: %s", teacher.id)
        return FlashMessage.success(MSG_DELETED)

    async def _find_or_raise(self, teacher_id: TeacherId) -> User:
        if teacher_id is None or teacher_id == "":
            raise TeacherNotFoundError(None)

        teacher = await self._directory.find_by_id(teacher_id)
        if teacher is None:
            raise TeacherNotFoundError(str(teacher_id))
        return teacher

    @staticmethod
    def _raise_if_failed(result: IdentityResult) -> None:
        if not result.succeeded:
            raise TeacherValidationError(result.descriptions)
