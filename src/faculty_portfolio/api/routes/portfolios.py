"""Portfolio and sharing routes for the API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.schemas.common import DeletedResponse, MessageResponse
from faculty_portfolio.api.schemas.portfolios import (
    PortfolioCreateRequest,
    PortfolioResponse,
    PortfolioUpdateRequest,
    ShareCreateRequest,
    SharedPortfolioResponse,
    ShareResponse,
    ShareUpdateRequest,
)
from faculty_portfolio.services import portfolios as portfolio_service

router = APIRouter(prefix="/portfolios", tags=["portfolios"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]
PortfolioId = Annotated[int, Path(description="Portfolio ID")]


@router.post(
    "",
    response_model=PortfolioResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Blank name, unknown type or missing department"},
        403: {"description": "Role may not create this portfolio type"},
        409: {"description": "Duplicate portfolio name"},
    },
)
def create_portfolio(data: PortfolioCreateRequest, faculty_id: CurrentFaculty) -> PortfolioResponse:
    """Create a portfolio owned by the caller."""
    result = portfolio_service.create_portfolio(
        faculty_id, data.name, data.description, data.type
    )
    return PortfolioResponse(**result)


@router.get("/mine", response_model=list[PortfolioResponse])
def list_my_portfolios(faculty_id: CurrentFaculty) -> list[PortfolioResponse]:
    return [PortfolioResponse(**p) for p in portfolio_service.list_my_portfolios(faculty_id)]


@router.get("/department", response_model=list[PortfolioResponse])
def list_department_portfolios(faculty_id: CurrentFaculty) -> list[PortfolioResponse]:
    """List department portfolios. Empty unless the caller is a head or dean."""
    results = portfolio_service.list_department_portfolios(faculty_id)
    return [PortfolioResponse(**p) for p in results]


@router.get("/college", response_model=list[PortfolioResponse])
def list_college_portfolios(faculty_id: CurrentFaculty) -> list[PortfolioResponse]:
    results = portfolio_service.list_college_portfolios(faculty_id)
    return [PortfolioResponse(**p) for p in results]


@router.get("/shared", response_model=list[SharedPortfolioResponse])
def list_shared_with_me(faculty_id: CurrentFaculty) -> list[SharedPortfolioResponse]:
    results = portfolio_service.list_shared_with_me(faculty_id)
    return [SharedPortfolioResponse(**s) for s in results]


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
def get_portfolio(portfolio_id: PortfolioId, faculty_id: CurrentFaculty) -> PortfolioResponse:
    return PortfolioResponse(**portfolio_service.get_portfolio(faculty_id, portfolio_id))


@router.patch("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio(
    portfolio_id: PortfolioId,
    data: PortfolioUpdateRequest,
    faculty_id: CurrentFaculty,
) -> PortfolioResponse:
    """Update a portfolio. Only provided fields change."""
    result = portfolio_service.update_portfolio(
        faculty_id,
        portfolio_id,
        name=data.name,
        description=data.description,
        is_active=data.is_active,
    )
    return PortfolioResponse(**result)


@router.delete("/{portfolio_id}", response_model=DeletedResponse)
def delete_portfolio(portfolio_id: PortfolioId, faculty_id: CurrentFaculty) -> DeletedResponse:
    """Delete a portfolio with all of its items and shares."""
    deleted = portfolio_service.delete_portfolio(faculty_id, portfolio_id)
    return DeletedResponse(message="Portfolio deleted", deleted=deleted)


@router.get("/{portfolio_id}/shares", response_model=list[ShareResponse])
def list_shares(portfolio_id: PortfolioId, faculty_id: CurrentFaculty) -> list[ShareResponse]:
    return [ShareResponse(**s) for s in portfolio_service.list_shares(faculty_id, portfolio_id)]


@router.post(
    "/{portfolio_id}/shares",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Sharing with the owner or unknown permission"},
        404: {"description": "Portfolio or recipient not found"},
        409: {"description": "Already shared with this faculty member"},
    },
)
def share_portfolio(
    portfolio_id: PortfolioId,
    data: ShareCreateRequest,
    faculty_id: CurrentFaculty,
) -> ShareResponse:
    result = portfolio_service.share_portfolio(
        faculty_id, portfolio_id, data.faculty_id, data.permission
    )
    return ShareResponse(**result)


@router.patch("/{portfolio_id}/shares/{share_id}", response_model=ShareResponse)
def update_share(
    portfolio_id: PortfolioId,
    share_id: Annotated[int, Path(description="Share ID")],
    data: ShareUpdateRequest,
    faculty_id: CurrentFaculty,
) -> ShareResponse:
    result = portfolio_service.update_share_permission(
        faculty_id, portfolio_id, share_id, data.permission
    )
    return ShareResponse(**result)


@router.delete("/{portfolio_id}/shares/{share_id}", response_model=MessageResponse)
def revoke_share(
    portfolio_id: PortfolioId,
    share_id: Annotated[int, Path(description="Share ID")],
    faculty_id: CurrentFaculty,
) -> MessageResponse:
    portfolio_service.revoke_share(faculty_id, portfolio_id, share_id)
    return MessageResponse(message="Share revoked")
