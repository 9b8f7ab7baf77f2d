"""Personal documents: files a faculty member keeps outside any portfolio.

A personal document is a PortfolioItem without a portfolio. It is approved
on upload and only visible to its uploader.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.orm import Session

from faculty_portfolio.constants import ItemStatus
from faculty_portfolio.constants.uploads import (
    BLOCKED_CONTENT_TYPE_PREFIXES,
    CONTENT_TYPE_ICONS,
    DEFAULT_DOCUMENT_CATEGORY,
    DEFAULT_FILE_ICON,
    DOCUMENT_ALLOWED_EXTENSIONS,
    DOCUMENT_CATEGORIES,
    DOCUMENT_MAX_UPLOAD_BYTES,
)
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import PortfolioItem
from faculty_portfolio.data.models.portfolio_item import new_file_id
from faculty_portfolio.services.errors import (
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from faculty_portfolio.services.items import UploadedFile
from faculty_portfolio.services.lookup import load_faculty, load_item
from faculty_portfolio.services.storage import (
    category_from_path,
    delete_file,
    document_file_path,
    remove_stored_files,
    write_file,
)

logger = logging.getLogger(__name__)

__all__ = [
    "delete_user_document",
    "document_stats",
    "format_file_size",
    "icon_for_content_type",
    "list_user_documents",
    "normalize_category",
    "upload_user_document",
    "upload_user_documents",
]


def format_file_size(size: int | None) -> str:
    """Return a human-readable size such as ``"1.5 MB"``."""
    if size is None:
        return "0 B"
    if size < 1024:
        return f"{size} B"
    if size < 1024**2:
        return f"{size / 1024:.1f} KB"
    if size < 1024**3:
        return f"{size / 1024**2:.1f} MB"
    return f"{size / 1024**3:.1f} GB"


def icon_for_content_type(content_type: str | None) -> str:
    """Return a Font Awesome icon class for a MIME type."""
    if not content_type:
        return DEFAULT_FILE_ICON
    lowered = content_type.lower()
    for marker, icon in CONTENT_TYPE_ICONS:
        if marker in lowered:
            return icon
    return DEFAULT_FILE_ICON


def normalize_category(category: str | None) -> str:
    """Map an arbitrary category to a known one, defaulting to ``personal``."""
    cleaned = (category or "").strip().lower()
    return cleaned if cleaned in DOCUMENT_CATEGORIES else DEFAULT_DOCUMENT_CATEGORY


def _document_to_dict(document: PortfolioItem) -> dict:
    return {
        "id": document.id,
        "name": document.name,
        "file_type": document.file_type,
        "file_size": document.file_size,
        "formatted_size": format_file_size(document.file_size),
        "file_id": document.file_id,
        "uploaded_at": document.uploaded_at,
        "status": document.status,
        "comments": document.comments,
        "category": category_from_path(document.file_path),
        "icon": icon_for_content_type(document.file_type),
    }


def _validate_document(filename: str, content_type: str | None, data: bytes) -> str:
    if not data:
        raise ValidationError("Please select a file to upload")
    name = Path(filename or "").name.strip()
    if not name:
        raise ValidationError("Invalid file name")
    if len(data) > DOCUMENT_MAX_UPLOAD_BYTES:
        raise ValidationError(f"File '{name}' exceeds the 50 MB upload limit")
    if content_type and content_type.lower().startswith(BLOCKED_CONTENT_TYPE_PREFIXES):
        raise ValidationError(f"Video files are not allowed: '{name}'")
    if Path(name).suffix.lower() not in DOCUMENT_ALLOWED_EXTENSIONS:
        raise ValidationError(f"File type not allowed: '{name}'")
    return name


def _personal_documents(session: Session, faculty_id: int) -> list[PortfolioItem]:
    return (
        session.query(PortfolioItem)
        .filter(
            PortfolioItem.uploaded_by_id == faculty_id,
            PortfolioItem.portfolio_id.is_(None),
            PortfolioItem.is_folder.is_(False),
        )
        .order_by(PortfolioItem.uploaded_at.desc(), PortfolioItem.id.desc())
        .all()
    )


def list_user_documents(faculty_id: int) -> list[dict]:
    """Return the caller's personal documents, newest first."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        return [_document_to_dict(doc) for doc in _personal_documents(session, faculty.id)]


def upload_user_document(
    faculty_id: int,
    filename: str,
    content_type: str | None,
    data: bytes,
    category: str | None = None,
) -> dict:
    """Store a personal document under the given category.

    Args:
        faculty_id: Uploader and sole viewer of the document.
        filename: Original filename, used for display and the extension.
        content_type: MIME type reported by the client.
        data: File contents.
        category: personal, work, archive or shared. Unknown values map
            to personal.

    Returns:
        Dictionary with the stored document.

    Raises:
        ValidationError: Empty file, blank name, oversize, video content or
            a disallowed extension.
    """
    name = _validate_document(filename, content_type, data)
    resolved_category = normalize_category(category)

    with get_session() as session:
        faculty = load_faculty(session, faculty_id)

        file_id = new_file_id()
        target = document_file_path(faculty.id, resolved_category, file_id, name)
        write_file(target, data)
        try:
            document = PortfolioItem(
                name=name,
                is_folder=False,
                file_path=str(target),
                file_type=content_type,
                file_size=len(data),
                file_id=file_id,
                comments=f"Uploaded to {resolved_category} documents",
                status=ItemStatus.APPROVED,
                uploaded_by=faculty,
            )
            session.add(document)
            session.flush()
            result = _document_to_dict(document)
        except Exception:
            delete_file(target)
            raise

    logger.info(
        "Faculty %s uploaded personal document '%s' (%s)", faculty_id, name, resolved_category
    )
    return result


def upload_user_documents(
    faculty_id: int, files: list[UploadedFile], category: str | None = None
) -> dict:
    """Upload several personal documents, reporting failures per file."""
    uploaded: list[dict] = []
    failed: list[dict] = []
    for upload in files:
        try:
            uploaded.append(
                upload_user_document(
                    faculty_id, upload.filename, upload.content_type, upload.data, category
                )
            )
        except (ValidationError, OSError) as exc:
            logger.warning("Document upload of '%s' failed: %s", upload.filename, exc)
            failed.append({"filename": upload.filename, "error": str(exc)})
    return {"uploaded": uploaded, "failed": failed}


def delete_user_document(faculty_id: int, document_id: int) -> None:
    """Delete one of the caller's personal documents and its stored file.

    Raises:
        NotFoundError: The id does not name a personal document.
        PermissionDeniedError: The document belongs to someone else.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        document = load_item(session, document_id)
        if document.portfolio_id is not None or document.is_folder:
            raise NotFoundError(f"Document {document_id} not found")
        if document.uploaded_by_id != faculty.id:
            logger.warning("Faculty %s tried to delete document %s", faculty.id, document_id)
            raise PermissionDeniedError("You can only delete your own documents")

        path = document.file_path
        session.delete(document)

    remove_stored_files([path] if path else [])
    logger.info("Faculty %s deleted personal document %s", faculty_id, document_id)


def document_stats(faculty_id: int) -> dict:
    """Return totals and a per-category count of the caller's documents."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        documents = _personal_documents(session, faculty.id)

        categories = dict.fromkeys(DOCUMENT_CATEGORIES, 0)
        total_size = 0
        for document in documents:
            categories[category_from_path(document.file_path)] += 1
            total_size += document.file_size or 0

    return {
        "total_files": len(documents),
        "total_size": total_size,
        "formatted_size": format_file_size(total_size),
        "categories": categories,
    }
