"""Portfolio item, folder, upload and download routes."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from fastapi.responses import FileResponse

from faculty_portfolio.api.dependencies import get_current_faculty_id
from faculty_portfolio.api.schemas.common import DeletedResponse
from faculty_portfolio.api.schemas.items import (
    FolderContentsResponse,
    FolderCreateRequest,
    FolderSummary,
    ItemListResponse,
    ItemResponse,
    ItemUpdateRequest,
    UploadResultResponse,
)
from faculty_portfolio.constants.uploads import PORTFOLIO_MAX_UPLOAD_BYTES
from faculty_portfolio.services import items as item_service
from faculty_portfolio.services.errors import ValidationError

router = APIRouter(tags=["items"])

CurrentFaculty = Annotated[int, Depends(get_current_faculty_id)]
PortfolioId = Annotated[int, Path(description="Portfolio ID")]
ItemId = Annotated[int, Path(description="Item ID")]


_CHUNK_SIZE = 8192  # 8KB chunks


async def read_upload(upload: UploadFile, max_bytes: int) -> item_service.UploadedFile:
    """Read one multipart upload in chunks, stopping once it passes ``max_bytes``.

    Raises:
        ValidationError: The file is larger than ``max_bytes``.
    """
    filename = upload.filename or ""
    buffer = bytearray()
    while True:
        chunk = await upload.read(_CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            limit_mb = max_bytes // (1024 * 1024)
            raise ValidationError(f"File '{filename}' exceeds the {limit_mb} MB upload limit")
    return item_service.UploadedFile(filename, upload.content_type, bytes(buffer))


async def read_uploads(
    files: list[UploadFile], max_bytes: int
) -> tuple[list[item_service.UploadedFile], list[dict]]:
    """Read several uploads, reporting oversize files instead of buffering them.

    Returns:
        The files that fit and ``{"filename", "error"}`` entries for the rest.
    """
    uploads: list[item_service.UploadedFile] = []
    failed: list[dict] = []
    for upload in files:
        try:
            uploads.append(await read_upload(upload, max_bytes))
        except ValidationError as exc:
            failed.append({"filename": upload.filename or "", "error": str(exc)})
    return uploads, failed


@router.get("/portfolios/{portfolio_id}/items", response_model=ItemListResponse)
def list_items(
    portfolio_id: PortfolioId,
    faculty_id: CurrentFaculty,
    folder_id: Annotated[int | None, Query(description="Folder to list, root if omitted")] = None,
) -> ItemListResponse:
    """List one level of a portfolio with the breadcrumb leading to it."""
    items = item_service.list_items(faculty_id, portfolio_id, folder_id)
    breadcrumb = item_service.folder_path(faculty_id, folder_id) if folder_id is not None else []
    return ItemListResponse(
        portfolio_id=portfolio_id,
        folder_id=folder_id,
        items=[ItemResponse(**i) for i in items],
        breadcrumb=breadcrumb,
    )


@router.get("/portfolios/{portfolio_id}/folders", response_model=list[FolderSummary])
def list_folders(portfolio_id: PortfolioId, faculty_id: CurrentFaculty) -> list[FolderSummary]:
    return [FolderSummary(**f) for f in item_service.list_folders(faculty_id, portfolio_id)]


@router.post(
    "/portfolios/{portfolio_id}/folders",
    response_model=ItemResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_folder(
    portfolio_id: PortfolioId,
    data: FolderCreateRequest,
    faculty_id: CurrentFaculty,
) -> ItemResponse:
    result = item_service.create_folder(
        faculty_id, portfolio_id, data.name, data.parent_folder_id
    )
    return ItemResponse(**result)


@router.post(
    "/portfolios/{portfolio_id}/files",
    response_model=UploadResultResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload files into a portfolio",
    description=(
        "Upload one or more files. A single failing file is reported as an error; "
        "with several files each failure is listed and the rest are stored."
    ),
    responses={
        400: {"description": "Invalid file or folder"},
        403: {"description": "No edit access to the portfolio"},
        404: {"description": "Portfolio not found"},
    },
)
async def upload_files(
    portfolio_id: PortfolioId,
    faculty_id: CurrentFaculty,
    files: Annotated[list[UploadFile], File(description="Files to upload")],
    folder_id: Annotated[int | None, Form(description="Target folder")] = None,
    comments: Annotated[str | None, Form(description="Comments for reviewers")] = None,
) -> UploadResultResponse:
    if len(files) == 1:
        upload = await read_upload(files[0], PORTFOLIO_MAX_UPLOAD_BYTES)
        result = item_service.upload_file(
            faculty_id,
            portfolio_id,
            folder_id,
            upload.filename,
            upload.content_type,
            upload.data,
            comments,
        )
        return UploadResultResponse(uploaded=[ItemResponse(**result)], failed=[])

    uploads, too_large = await read_uploads(files, PORTFOLIO_MAX_UPLOAD_BYTES)
    outcome = item_service.upload_files(faculty_id, portfolio_id, folder_id, uploads, comments)
    return UploadResultResponse(
        uploaded=[ItemResponse(**i) for i in outcome["uploaded"]],
        failed=too_large + outcome["failed"],
    )


@router.get("/items/{item_id}", response_model=ItemResponse)
def get_item(item_id: ItemId, faculty_id: CurrentFaculty) -> ItemResponse:
    return ItemResponse(**item_service.get_item(faculty_id, item_id))


@router.get(
    "/items/{item_id}/download",
    responses={
        200: {"description": "Stored file"},
        404: {"description": "Item is a folder or its file is missing"},
    },
)
def download_item(item_id: ItemId, faculty_id: CurrentFaculty) -> FileResponse:
    download = item_service.open_download(faculty_id, item_id)
    return FileResponse(
        download.path,
        media_type=download.content_type or "application/octet-stream",
        filename=download.name,
    )


@router.patch("/items/{item_id}", response_model=ItemResponse)
def update_item(
    item_id: ItemId,
    data: ItemUpdateRequest,
    faculty_id: CurrentFaculty,
) -> ItemResponse:
    """Rename and/or move an item. Either both changes apply or neither does."""
    result = item_service.update_item(
        faculty_id,
        item_id,
        name=data.name,
        new_parent_id=data.parent_folder_id,
        move="parent_folder_id" in data.model_fields_set,
    )
    return ItemResponse(**result)


@router.delete("/items/{item_id}", response_model=DeletedResponse)
def delete_item(item_id: ItemId, faculty_id: CurrentFaculty) -> DeletedResponse:
    """Delete an item; folders are deleted with everything inside them."""
    deleted = item_service.delete_item(faculty_id, item_id)
    return DeletedResponse(message="Item deleted", deleted=deleted)


@router.get("/folders/{folder_id}", response_model=FolderContentsResponse)
def get_folder(
    folder_id: Annotated[int, Path(description="Folder ID")],
    faculty_id: CurrentFaculty,
) -> FolderContentsResponse:
    return FolderContentsResponse(**item_service.get_folder_contents(faculty_id, folder_id))
