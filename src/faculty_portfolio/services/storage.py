"""Helpers for storing and removing uploaded files on disk.

All stored files live under a single root directory. Portfolio files are
grouped per owner and portfolio, personal documents per user and category.
"""

from __future__ import annotations

import logging
import os
import time
import uuid
from pathlib import Path

from faculty_portfolio.constants.uploads import (
    BASE_SUBDIRECTORIES,
    DEFAULT_DOCUMENT_CATEGORY,
    USER_SUBDIRECTORIES,
)

logger = logging.getLogger(__name__)

# Path segments that identify a non-default document category.
_PATH_CATEGORIES = ("work", "archive", "shared")


def get_upload_storage_root() -> Path:
    """Return the root directory for uploaded files."""
    env_root = os.getenv("FPMS_UPLOAD_DIR")
    if env_root:
        return Path(env_root).expanduser().resolve()

    project_root = Path(__file__).resolve().parents[3]
    return project_root / "uploads"


def ensure_base_directories() -> Path:
    """Create the storage root and its top-level subdirectories.

    Returns:
        The storage root.
    """
    root = get_upload_storage_root()
    for name in BASE_SUBDIRECTORIES:
        (root / name).mkdir(parents=True, exist_ok=True)
    logger.info("Upload storage ready at %s", root)
    return root


def create_user_directories(faculty_id: int) -> Path:
    """Create ``users/<id>/{profile-photos,documents,portfolios}``.

    Returns:
        The user's base directory.
    """
    user_dir = get_upload_storage_root() / "users" / str(faculty_id)
    for name in USER_SUBDIRECTORIES:
        (user_dir / name).mkdir(parents=True, exist_ok=True)
    return user_dir


def _extension(original_name: str) -> str:
    return Path(original_name).suffix.lower()


def portfolio_file_path(faculty_id: int, portfolio_id: int, original_name: str) -> Path:
    """Return a fresh storage path for a file uploaded into a portfolio."""
    filename = f"{uuid.uuid4()}{_extension(original_name)}"
    return get_upload_storage_root() / "portfolios" / str(faculty_id) / str(portfolio_id) / filename


def document_file_path(faculty_id: int, category: str, file_id: str, original_name: str) -> Path:
    """Return a fresh storage path for a personal document."""
    filename = f"{file_id}_{int(time.time())}{_extension(original_name)}"
    return (
        get_upload_storage_root() / "documents" / f"user_{faculty_id}" / category / filename
    )


def write_file(path: Path, data: bytes) -> Path:
    """Write ``data`` to ``path``, creating parent directories first."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


def _is_within_root(path: Path) -> bool:
    root = get_upload_storage_root().resolve()
    try:
        path.resolve().relative_to(root)
    except ValueError:
        return False
    return True


def delete_file(path: str | Path | None) -> bool:
    """Remove a stored file.

    Missing files are ignored and paths outside the storage root are refused.

    Args:
        path: Stored file path, may be None for folder rows.

    Returns:
        True if a file was removed.
    """
    if not path:
        return False

    target = Path(path)
    if not _is_within_root(target):
        logger.warning("Refusing to delete file outside upload root: %s", target)
        return False
    if not target.is_file():
        return False

    target.unlink()
    logger.info("Deleted stored file %s", target)
    return True


def category_from_path(path: str | Path | None) -> str:
    """Infer a personal document category from its stored path."""
    if not path:
        return DEFAULT_DOCUMENT_CATEGORY
    target = Path(path)
    try:
        parts = target.resolve().relative_to(get_upload_storage_root().resolve()).parts
    except ValueError:
        parts = target.parts
    for category in _PATH_CATEGORIES:
        if category in parts:
            return category
    return DEFAULT_DOCUMENT_CATEGORY


def remove_stored_files(paths: list[str]) -> int:
    """Delete several stored files after their rows are gone.

    Failures are logged and do not interrupt the remaining deletions.

    Returns:
        Number of files removed.
    """
    removed = 0
    for path in paths:
        try:
            if delete_file(path):
                removed += 1
        except OSError:
            logger.exception("Failed to delete stored file %s", path)
    return removed
