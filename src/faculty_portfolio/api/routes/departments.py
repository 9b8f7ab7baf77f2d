"""Department routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.schemas.common import MessageResponse
from faculty_portfolio.api.schemas.departments import (
    DepartmentCreateRequest,
    DepartmentOverviewResponse,
    DepartmentResponse,
    DepartmentStatsResponse,
    DepartmentUpdateRequest,
    FacultyAssignRequest,
    MemberResponse,
)
from faculty_portfolio.services import departments as department_service

router = APIRouter(prefix="/departments", tags=["departments"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]
DeptCode = Annotated[str, Path(description="Department code")]


@router.get("", response_model=list[DepartmentResponse])
def list_departments(_: CurrentFaculty) -> list[DepartmentResponse]:
    return [DepartmentResponse(**d) for d in department_service.list_departments()]


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing code or name"},
        403: {"description": "Caller is not a dean"},
        409: {"description": "Department code already exists"},
    },
)
def create_department(
    data: DepartmentCreateRequest, faculty_id: CurrentFaculty
) -> DepartmentResponse:
    result = department_service.create_department(faculty_id, data.model_dump())
    return DepartmentResponse(**result)


@router.get("/mine", response_model=DepartmentResponse | None)
def my_department(faculty_id: CurrentFaculty) -> DepartmentResponse | None:
    """Return the caller's department, or null when unassigned."""
    result = department_service.my_department(faculty_id)
    return DepartmentResponse(**result) if result is not None else None


@router.get("/{dept_code}", response_model=DepartmentResponse)
def get_department(dept_code: DeptCode, _: CurrentFaculty) -> DepartmentResponse:
    return DepartmentResponse(**department_service.get_department(dept_code))


@router.patch("/{dept_code}", response_model=DepartmentResponse)
def update_department(
    dept_code: DeptCode,
    data: DepartmentUpdateRequest,
    faculty_id: CurrentFaculty,
) -> DepartmentResponse:
    """Update a department. Only provided fields change."""
    changes = data.model_dump(exclude_unset=True)
    result = department_service.update_department(faculty_id, dept_code, changes)
    return DepartmentResponse(**result)


@router.delete(
    "/{dept_code}",
    response_model=MessageResponse,
    responses={409: {"description": "Department still has members"}},
)
def delete_department(dept_code: DeptCode, faculty_id: CurrentFaculty) -> MessageResponse:
    department_service.delete_department(faculty_id, dept_code)
    return MessageResponse(message=f"Department '{dept_code}' deleted")


@router.get("/{dept_code}/faculty", response_model=list[MemberResponse])
def list_members(dept_code: DeptCode, _: CurrentFaculty) -> list[MemberResponse]:
    return [MemberResponse(**m) for m in department_service.list_members(dept_code)]


@router.post("/{dept_code}/faculty", response_model=MemberResponse)
def add_faculty(
    dept_code: DeptCode,
    data: FacultyAssignRequest,
    faculty_id: CurrentFaculty,
) -> MemberResponse:
    """Add an unassigned faculty member to the department."""
    result = department_service.add_faculty(faculty_id, dept_code, data.faculty_id)
    return MemberResponse(**result)


@router.get("/{dept_code}/stats", response_model=DepartmentStatsResponse)
def department_stats(dept_code: DeptCode, _: CurrentFaculty) -> DepartmentStatsResponse:
    return DepartmentStatsResponse(**department_service.department_stats(dept_code))


@router.get("/{dept_code}/overview", response_model=DepartmentOverviewResponse)
def department_overview(dept_code: DeptCode, _: CurrentFaculty) -> DepartmentOverviewResponse:
    return DepartmentOverviewResponse(**department_service.department_overview(dept_code))


@router.post("/{dept_code}/chairperson", response_model=DepartmentResponse)
def assign_chairperson(
    dept_code: DeptCode,
    data: FacultyAssignRequest,
    faculty_id: CurrentFaculty,
) -> DepartmentResponse:
    result = department_service.assign_chairperson(faculty_id, dept_code, data.faculty_id)
    return DepartmentResponse(**result)
