"""Personal document routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.routes.items import read_upload, read_uploads
from faculty_portfolio.api.schemas.common import MessageResponse
from faculty_portfolio.api.schemas.documents import (
    DocumentResponse,
    DocumentStatsResponse,
    DocumentUploadResponse,
)
from faculty_portfolio.constants.uploads import DOCUMENT_MAX_UPLOAD_BYTES
from faculty_portfolio.services import documents as document_service

router = APIRouter(prefix="/documents", tags=["documents"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]


@router.get("", response_model=list[DocumentResponse])
def list_documents(faculty_id: CurrentFaculty) -> list[DocumentResponse]:
    """List the caller's personal documents, newest first."""
    return [DocumentResponse(**d) for d in document_service.list_user_documents(faculty_id)]


@router.get("/stats", response_model=DocumentStatsResponse)
def document_stats(faculty_id: CurrentFaculty) -> DocumentStatsResponse:
    return DocumentStatsResponse(**document_service.document_stats(faculty_id))


@router.post(
    "",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Empty, oversize, video or disallowed file"}},
)
async def upload_documents(
    faculty_id: CurrentFaculty,
    files: Annotated[list[UploadFile], File(description="Documents to upload")],
    category: Annotated[
        str | None, Form(description="personal, work, archive or shared")
    ] = None,
) -> DocumentUploadResponse:
    if len(files) == 1:
        upload = await read_upload(files[0], DOCUMENT_MAX_UPLOAD_BYTES)
        result = document_service.upload_user_document(
            faculty_id, upload.filename, upload.content_type, upload.data, category
        )
        return DocumentUploadResponse(uploaded=[DocumentResponse(**result)], failed=[])

    uploads, too_large = await read_uploads(files, DOCUMENT_MAX_UPLOAD_BYTES)
    outcome = document_service.upload_user_documents(faculty_id, uploads, category)
    return DocumentUploadResponse(
        uploaded=[DocumentResponse(**d) for d in outcome["uploaded"]],
        failed=too_large + outcome["failed"],
    )


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: Annotated[int, Path(description="Document ID")],
    faculty_id: CurrentFaculty,
) -> MessageResponse:
    document_service.delete_user_document(faculty_id, document_id)
    return MessageResponse(message="Document deleted")
