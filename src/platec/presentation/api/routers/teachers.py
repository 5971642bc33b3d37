"""Teacher account management (admin only).

Mutating routes return where the client should go next (the list view)
together with a one-line flash message.
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from platec.application.dtos import FlashMessage, TeacherForm, TeacherProfile
from platec.domain.teacher import TeacherValidationError
from platec.presentation.api.dependencies import (
    AdminUser,
    DBSession,
    TeacherService,
    verify_csrf_token,
)
from platec.presentation.api.schemas import (
    FlashRedirectResponse,
    TeacherCreatedResponse,
    TeacherCreateRequest,
    TeacherFormResponse,
    TeacherResponse,
    TeacherUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

LIST_ROUTE = "list_teachers"


def _list_path(request: Request) -> str:
    return str(request.app.url_path_for(LIST_ROUTE))


def _redirect(request: Request, flash: FlashMessage | None) -> FlashRedirectResponse:
    return FlashRedirectResponse(
        message=flash.text if flash else None,
        category=flash.category.value if flash else None,
        redirect_to=_list_path(request),
    )


@router.get(
    "",
    name=LIST_ROUTE,
    summary="List teachers",
    responses={
        200: {"description": "All users holding the Teacher role"},
        401: {"description": "Not authenticated"},
        403: {"description": "Admin access required"},
    },
)
async def list_teachers(
    _admin: AdminUser,
    service: TeacherService,
) -> list[TeacherResponse]:
    teachers = await service.list_teachers()
    return [TeacherResponse.model_validate(t) for t in teachers]


@router.get("/create", summary="Empty registration form")
async def create_form(_admin: AdminUser) -> TeacherFormResponse:
    return TeacherFormResponse()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    summary="Create a teacher account",
    dependencies=[Depends(verify_csrf_token)],
    responses={
        201: {"description": "Teacher created; credentials emailed or disclosed"},
        400: {"description": "Rejected by the user directory"},
        403: {"description": "Admin access or anti-forgery token missing"},
    },
)
async def create_teacher(
    request: Request,
    body: TeacherCreateRequest,
    _admin: AdminUser,
    service: TeacherService,
    session: DBSession,
) -> TeacherCreatedResponse:
    """
    Create a teacher and send the login credentials by email.

    When the email cannot be sent the account is still created and the
    credentials are returned in the flash message instead.
    """
    form = TeacherForm(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    try:
        result = await service.create_teacher(form)
        await session.commit()
    except TeacherValidationError:
        await session.rollback()
        raise
    except Exception:
        await session.rollback()
        logger.exception("Teacher creation failed for %s", body.email)
        raise

    redirect = _redirect(request, result.flash)
    return TeacherCreatedResponse(
        **redirect.model_dump(),
        teacher=TeacherResponse.model_validate(result.teacher),
        credentials_emailed=result.credentials_emailed,
    )


@router.get(
    "/{teacher_id}",
    summary="Teacher details",
    responses={404: {"description": "Teacher not found"}},
)
async def get_teacher(
    teacher_id: str,
    _admin: AdminUser,
    service: TeacherService,
) -> TeacherResponse:
    teacher = await service.get_teacher(teacher_id)
    return TeacherResponse.model_validate(teacher)


@router.get(
    "/{teacher_id}/edit",
    summary="Edit form for a teacher",
    responses={404: {"description": "Teacher not found"}},
)
async def edit_form(
    teacher_id: str,
    _admin: AdminUser,
    service: TeacherService,
) -> TeacherFormResponse:
    profile = await service.get_edit_form(teacher_id)
    return TeacherFormResponse(
        email=profile.email,
        first_name=profile.first_name,
        last_name=profile.last_name,
    )


@router.post(
    "/{teacher_id}/edit",
    summary="Update a teacher",
    dependencies=[Depends(verify_csrf_token)],
    responses={
        400: {"description": "Rejected by the user directory"},
        404: {"description": "Teacher not found"},
    },
)
async def update_teacher(
    request: Request,
    teacher_id: str,
    body: TeacherUpdateRequest,
    _admin: AdminUser,
    service: TeacherService,
    session: DBSession,
) -> FlashRedirectResponse:
    profile = TeacherProfile(
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    try:
        flash = await service.update_teacher(teacher_id, profile)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return _redirect(request, flash)


@router.get(
    "/{teacher_id}/delete",
    summary="Delete confirmation for a teacher",
    responses={404: {"description": "Teacher not found"}},
)
async def delete_confirmation(
    teacher_id: str,
    _admin: AdminUser,
    service: TeacherService,
) -> TeacherResponse:
    teacher = await service.get_delete_confirmation(teacher_id)
    return TeacherResponse.model_validate(teacher)


@router.post(
    "/{teacher_id}/delete",
    summary="Delete a teacher",
    dependencies=[Depends(verify_csrf_token)],
    responses={200: {"description": "Deleted, or nothing to delete"}},
)
async def delete_teacher(
    request: Request,
    teacher_id: str,
    _admin: AdminUser,
    service: TeacherService,
    session: DBSession,
) -> FlashRedirectResponse:
    try:
        flash = await service.delete_teacher(teacher_id)
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return _redirect(request, flash)
