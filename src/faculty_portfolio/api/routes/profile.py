"""Profile routes for the logged-in faculty member."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.schemas.common import MessageResponse
from faculty_portfolio.api.schemas.profile import (
    EmailChangeRequest,
    PasswordChangeRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)
from faculty_portfolio.services import profile as profile_service

router = APIRouter(prefix="/profile", tags=["profile"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]


@router.get("", response_model=ProfileResponse)
def get_profile(faculty_id: CurrentFaculty) -> ProfileResponse:
    return ProfileResponse(**profile_service.get_profile(faculty_id))


@router.patch("", response_model=ProfileResponse)
def update_profile(data: ProfileUpdateRequest, faculty_id: CurrentFaculty) -> ProfileResponse:
    """Edit personal details of the caller."""
    changes = data.model_dump(exclude_unset=True)
    return ProfileResponse(**profile_service.update_profile(faculty_id, changes))


@router.post(
    "/password",
    response_model=MessageResponse,
    responses={
        400: {"description": "New password too short"},
        401: {"description": "Current password is incorrect"},
    },
)
def change_password(data: PasswordChangeRequest, faculty_id: CurrentFaculty) -> MessageResponse:
    profile_service.change_password(faculty_id, data.current_password, data.new_password)
    return MessageResponse(message="Password changed successfully")


@router.post(
    "/email",
    response_model=ProfileResponse,
    responses={
        401: {"description": "Password is incorrect"},
        409: {"description": "Email is already registered"},
    },
)
def update_email(data: EmailChangeRequest, faculty_id: CurrentFaculty) -> ProfileResponse:
    result = profile_service.update_email(faculty_id, data.new_email, data.password)
    return ProfileResponse(**result)
