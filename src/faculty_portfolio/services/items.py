"""Portfolio items: uploads, folders and the folder tree.

Folders are rows with ``is_folder`` set and items point at their parent
through ``parent_folder_id``. Every walk over parent pointers or children
keeps a set of visited ids, so corrupt cyclic data cannot loop forever.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from sqlalchemy.orm import Session

from faculty_portfolio.constants import FacultyRole, ItemStatus
from faculty_portfolio.constants.uploads import (
    BLOCKED_CONTENT_TYPE_PREFIXES,
    PORTFOLIO_MAX_UPLOAD_BYTES,
)
from faculty_portfolio.data.db import get_session
from faculty_portfolio.data.models import Faculty, Portfolio, PortfolioItem
from faculty_portfolio.services import access
from faculty_portfolio.services.approvals import submit_for_approval
from faculty_portfolio.services.errors import NotFoundError, PortfolioSystemError, ValidationError
from faculty_portfolio.services.lookup import load_faculty, load_item, load_portfolio
from faculty_portfolio.services.storage import (
    delete_file,
    portfolio_file_path,
    remove_stored_files,
    write_file,
)

logger = logging.getLogger(__name__)

__all__ = [
    "Download",
    "UploadedFile",
    "create_folder",
    "delete_item",
    "folder_path",
    "get_folder_contents",
    "get_item",
    "list_folders",
    "list_items",
    "move_item",
    "open_download",
    "rename_item",
    "update_item",
    "upload_file",
    "upload_files",
]


class UploadedFile(NamedTuple):
    """An uploaded file as received from the transport layer."""

    filename: str
    content_type: str | None
    data: bytes


class Download(NamedTuple):
    path: Path
    name: str
    content_type: str | None


def item_to_dict(item: PortfolioItem) -> dict:
    """Convert a PortfolioItem model to a dictionary.

    Args:
        item: PortfolioItem model instance

    Returns:
        Dictionary with item data and its display helpers
    """
    return {
        "id": item.id,
        "name": item.name,
        "is_folder": item.is_folder,
        "file_type": item.file_type,
        "file_size": item.file_size,
        "formatted_size": item.formatted_size,
        "file_extension": item.file_extension,
        "file_id": item.file_id,
        "comments": item.comments,
        "status": item.status,
        "badge_color": item.badge_color,
        "icon_class": item.icon_class,
        "portfolio_id": item.portfolio_id,
        "parent_folder_id": item.parent_folder_id,
        "uploaded_by_id": item.uploaded_by_id,
        "uploaded_by_name": item.uploaded_by.full_name if item.uploaded_by else None,
        "uploaded_at": item.uploaded_at,
        "updated_at": item.updated_at,
    }


def _sort_key(item: PortfolioItem) -> tuple[bool, str]:
    # Folders first, then case-insensitive name.
    return (not item.is_folder, item.name.lower())


def _load_folder_in(session: Session, portfolio: Portfolio, folder_id: int) -> PortfolioItem:
    folder = session.get(PortfolioItem, folder_id)
    if folder is None or not folder.is_folder or folder.portfolio_id != portfolio.id:
        raise ValidationError(f"Item {folder_id} is not a folder in portfolio {portfolio.id}")
    return folder


def _breadcrumb(folder: PortfolioItem) -> list[dict]:
    """Walk parent pointers from ``folder`` up to the root."""
    path: list[dict] = []
    seen: set[int] = set()
    current: PortfolioItem | None = folder
    while current is not None and current.id not in seen:
        seen.add(current.id)
        path.append({"id": current.id, "name": current.name})
        current = current.parent_folder
    path.reverse()
    return path


def _collect_subtree(session: Session, root: PortfolioItem) -> list[PortfolioItem]:
    """Return ``root`` and all of its descendants, parents before children."""
    collected = [root]
    seen = {root.id}
    pending = [root.id] if root.is_folder else []
    while pending:
        parent_id = pending.pop()
        children = (
            session.query(PortfolioItem).filter(PortfolioItem.parent_folder_id == parent_id).all()
        )
        for child in children:
            if child.id in seen:
                continue
            seen.add(child.id)
            collected.append(child)
            if child.is_folder:
                pending.append(child.id)
    return collected


def _is_descendant(candidate: PortfolioItem, ancestor_id: int) -> bool:
    seen: set[int] = set()
    current: PortfolioItem | None = candidate
    while current is not None and current.id not in seen:
        if current.id == ancestor_id:
            return True
        seen.add(current.id)
        current = current.parent_folder
    return False


def _validate_upload(filename: str, content_type: str | None, data: bytes) -> str:
    name = Path(filename or "").name.strip()
    if not name:
        raise ValidationError("File name cannot be empty.")
    if not content_type:
        raise ValidationError(f"Content type is required for '{name}'")
    if content_type.lower().startswith(BLOCKED_CONTENT_TYPE_PREFIXES):
        raise ValidationError(f"Video files are not allowed: '{name}'")
    if not data:
        raise ValidationError(f"File '{name}' is empty")
    if len(data) > PORTFOLIO_MAX_UPLOAD_BYTES:
        raise ValidationError(f"File '{name}' exceeds the 10 MB upload limit")
    return name


def _store_upload(
    session: Session,
    uploader: Faculty,
    portfolio: Portfolio,
    folder_id: int | None,
    upload: UploadedFile,
    comments: str | None,
) -> dict:
    name = _validate_upload(upload.filename, upload.content_type, upload.data)
    folder = _load_folder_in(session, portfolio, folder_id) if folder_id is not None else None

    needs_review = uploader.role == FacultyRole.FACULTY
    target = portfolio_file_path(uploader.id, portfolio.id, name)
    write_file(target, upload.data)
    try:
        item = PortfolioItem(
            name=name,
            is_folder=False,
            file_path=str(target),
            file_type=upload.content_type,
            file_size=len(upload.data),
            comments=(comments or "").strip(),
            status=ItemStatus.PENDING if needs_review else ItemStatus.APPROVED,
            portfolio=portfolio,
            uploaded_by=uploader,
            parent_folder=folder,
        )
        session.add(item)
        session.flush()

        request = None
        if needs_review:
            request = submit_for_approval(session, item, uploader, comments)

        result = item_to_dict(item)
        result["approval_request_id"] = request.id if request is not None else None
    except Exception:
        delete_file(target)
        raise

    logger.info(
        "Faculty %s uploaded '%s' to portfolio %s (%s)",
        uploader.id,
        name,
        portfolio.id,
        result["status"],
    )
    return result


def upload_file(
    faculty_id: int,
    portfolio_id: int,
    folder_id: int | None,
    filename: str,
    content_type: str | None,
    data: bytes,
    comments: str | None = None,
) -> dict:
    """Store one file in a portfolio.

    Uploads by regular faculty members are PENDING and get an approval
    request. Uploads by department heads and deans are APPROVED directly.

    Raises:
        PermissionDeniedError: The caller lacks edit access.
        ValidationError: The file or target folder is invalid.
    """
    upload = UploadedFile(filename, content_type, data)
    with get_session() as session:
        uploader = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_edit_portfolio(uploader, portfolio)
        return _store_upload(session, uploader, portfolio, folder_id, upload, comments)


def upload_files(
    faculty_id: int,
    portfolio_id: int,
    folder_id: int | None,
    files: list[UploadedFile],
    comments: str | None = None,
) -> dict:
    """Upload several files independently.

    Access to the portfolio is checked once up front. After that a failing
    file is reported and the rest are still stored.

    Returns:
        ``{"uploaded": [...], "failed": [{"filename", "error"}]}``
    """
    with get_session() as session:
        uploader = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_edit_portfolio(uploader, portfolio)

    uploaded: list[dict] = []
    failed: list[dict] = []
    for upload in files:
        try:
            uploaded.append(
                upload_file(
                    faculty_id,
                    portfolio_id,
                    folder_id,
                    upload.filename,
                    upload.content_type,
                    upload.data,
                    comments,
                )
            )
        except (PortfolioSystemError, OSError) as exc:
            logger.warning("Upload of '%s' failed: %s", upload.filename, exc)
            failed.append({"filename": upload.filename, "error": str(exc)})
    return {"uploaded": uploaded, "failed": failed}


def create_folder(
    faculty_id: int, portfolio_id: int, name: str, parent_folder_id: int | None = None
) -> dict:
    """Create a folder, optionally inside another folder of the same portfolio."""
    clean_name = (name or "").strip()
    if not clean_name:
        raise ValidationError("Folder name cannot be empty.")

    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_edit_portfolio(faculty, portfolio)

        parent = None
        if parent_folder_id is not None:
            parent = _load_folder_in(session, portfolio, parent_folder_id)

        folder = PortfolioItem(
            name=clean_name,
            is_folder=True,
            status=ItemStatus.APPROVED,
            portfolio=portfolio,
            uploaded_by=faculty,
            parent_folder=parent,
        )
        session.add(folder)
        session.flush()
        result = item_to_dict(folder)

    logger.info(
        "Faculty %s created folder %s in portfolio %s", faculty_id, result["id"], portfolio_id
    )
    return result


def list_items(faculty_id: int, portfolio_id: int, folder_id: int | None = None) -> list[dict]:
    """Return the root items of a portfolio, or the children of ``folder_id``."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_view_portfolio(faculty, portfolio)

        query = session.query(PortfolioItem).filter(PortfolioItem.portfolio_id == portfolio.id)
        if folder_id is None:
            query = query.filter(PortfolioItem.parent_folder_id.is_(None))
        else:
            folder = _load_folder_in(session, portfolio, folder_id)
            query = query.filter(PortfolioItem.parent_folder_id == folder.id)

        return [item_to_dict(item) for item in sorted(query.all(), key=_sort_key)]


def folder_path(faculty_id: int, folder_id: int) -> list[dict]:
    """Return the breadcrumb from the root down to ``folder_id``, inclusive.

    A missing id or an id that is not a folder yields an empty path.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        folder = session.get(PortfolioItem, folder_id)
        if folder is None or not folder.is_folder:
            return []
        access.require_view_item(faculty, folder)
        return _breadcrumb(folder)


def list_folders(faculty_id: int, portfolio_id: int) -> list[dict]:
    """Return every folder of a portfolio as ``{id, name, parent_id}``."""
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        portfolio = load_portfolio(session, portfolio_id)
        access.require_view_portfolio(faculty, portfolio)

        folders = (
            session.query(PortfolioItem)
            .filter(PortfolioItem.portfolio_id == portfolio.id, PortfolioItem.is_folder.is_(True))
            .order_by(PortfolioItem.name, PortfolioItem.id)
            .all()
        )
        return [
            {"id": folder.id, "name": folder.name, "parent_id": folder.parent_folder_id}
            for folder in folders
        ]


def get_item(faculty_id: int, item_id: int) -> dict:
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        item = load_item(session, item_id)
        access.require_view_item(faculty, item)
        return item_to_dict(item)


def get_folder_contents(faculty_id: int, folder_id: int) -> dict:
    """Return a folder, its sorted children and its breadcrumb.

    Raises:
        NotFoundError: The id does not name a folder.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        folder = session.get(PortfolioItem, folder_id)
        if folder is None or not folder.is_folder:
            raise NotFoundError(f"Folder {folder_id} not found")
        access.require_view_item(faculty, folder)

        children = sorted(folder.children, key=_sort_key)
        return {
            "folder": item_to_dict(folder),
            "items": [item_to_dict(child) for child in children],
            "breadcrumb": _breadcrumb(folder),
        }


def _move_under(session: Session, item: PortfolioItem, new_parent_id: int | None) -> None:
    if new_parent_id is None:
        item.parent_folder = None
        return
    if item.portfolio is None:
        raise ValidationError("Personal documents cannot be moved into folders")
    target = _load_folder_in(session, item.portfolio, new_parent_id)
    if target.id == item.id or _is_descendant(target, item.id):
        raise ValidationError("Cannot move a folder into itself or its descendants")
    item.parent_folder = target


def update_item(
    faculty_id: int,
    item_id: int,
    name: str | None = None,
    new_parent_id: int | None = None,
    move: bool = False,
) -> dict:
    """Rename and/or move an item in one transaction.

    Both changes are validated before anything is written, so a rejected
    move leaves the name untouched.

    Args:
        faculty_id: Editor.
        item_id: Item being changed.
        name: New display name, or None to keep it.
        new_parent_id: Target folder, None for the root. Only used when
            ``move`` is set.
        move: Whether to move the item at all.

    Raises:
        ValidationError: Blank name, or a target that is not a folder of the
            same portfolio, or is the item itself or one of its descendants.
    """
    clean_name = None
    if name is not None:
        clean_name = name.strip()
        if not clean_name:
            raise ValidationError("Name cannot be empty.")

    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        item = load_item(session, item_id)
        access.require_edit_item(faculty, item)

        if move:
            _move_under(session, item, new_parent_id)
        if clean_name is not None:
            item.name = clean_name

        session.flush()
        result = item_to_dict(item)

    if move:
        logger.info("Faculty %s moved item %s under %s", faculty_id, item_id, new_parent_id)
    if clean_name is not None:
        logger.info("Faculty %s renamed item %s", faculty_id, item_id)
    return result


def move_item(faculty_id: int, item_id: int, new_parent_id: int | None = None) -> dict:
    """Move an item under another folder, or to the root when None."""
    return update_item(faculty_id, item_id, new_parent_id=new_parent_id, move=True)


def rename_item(faculty_id: int, item_id: int, name: str) -> dict:
    return update_item(faculty_id, item_id, name=name or "")


def delete_item(faculty_id: int, item_id: int) -> int:
    """Delete an item. Folders take their whole subtree with them.

    Returns:
        Number of rows deleted.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        item = load_item(session, item_id)
        access.require_delete_item(faculty, item)

        doomed = _collect_subtree(session, item)
        paths = [row.file_path for row in doomed if not row.is_folder and row.file_path]
        for row in reversed(doomed):
            session.delete(row)

    remove_stored_files(paths)
    logger.info("Faculty %s deleted item %s (%d rows)", faculty_id, item_id, len(doomed))
    return len(doomed)


def open_download(faculty_id: int, item_id: int) -> Download:
    """Resolve a stored file for download.

    Raises:
        NotFoundError: The item is a folder or its file is missing on disk.
    """
    with get_session() as session:
        faculty = load_faculty(session, faculty_id)
        item = load_item(session, item_id)
        access.require_view_item(faculty, item)

        if item.is_folder or not item.file_path:
            raise NotFoundError(f"Item {item_id} has no downloadable file")
        path = Path(item.file_path)
        if not path.is_file():
            logger.warning("Stored file for item %s is missing: %s", item_id, path)
            raise NotFoundError(f"File for item {item_id} is missing")
        return Download(path=path, name=item.name, content_type=item.file_type)
