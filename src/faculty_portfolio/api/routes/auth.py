"""Registration, login and session routes."""

from __future__ import annotations

from fastapi import APIRouter, Request, status

from faculty_portfolio.api.dependencies import SESSION_FACULTY_KEY
from faculty_portfolio.api.schemas.auth import (
    AccountResponse,
    LoginRequest,
    RegisterRequest,
    SessionResponse,
)
from faculty_portfolio.api.schemas.common import MessageResponse
from faculty_portfolio.services.auth import authenticate, describe_session, register_faculty

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing field or unknown role"},
        404: {"description": "Department not found"},
        409: {"description": "Username or email already taken"},
    },
)
def register(data: RegisterRequest) -> AccountResponse:
    """Create a faculty account with login credentials."""
    result = register_faculty(data.model_dump())
    return AccountResponse(**result)


@router.post(
    "/login",
    response_model=SessionResponse,
    responses={401: {"description": "Invalid username or password"}},
)
def login(data: LoginRequest, request: Request) -> SessionResponse:
    """Log in with a username or email and start a session."""
    faculty_id = authenticate(data.username, data.password)
    request.session.clear()
    request.session[SESSION_FACULTY_KEY] = faculty_id
    return SessionResponse(authenticated=True, **describe_session(faculty_id))


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request) -> MessageResponse:
    request.session.clear()
    return MessageResponse(message="Logged out")


@router.get("/session", response_model=SessionResponse)
def session_status(request: Request) -> SessionResponse:
    """Report whether the caller is logged in and as whom."""
    faculty_id = request.session.get(SESSION_FACULTY_KEY)
    info = describe_session(faculty_id) if faculty_id is not None else None
    if info is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, **info)
