"""Upload limits, file type rules and document categories."""

from __future__ import annotations

PORTFOLIO_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DOCUMENT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024

BLOCKED_CONTENT_TYPE_PREFIXES = ("video/",)

DOCUMENT_ALLOWED_EXTENSIONS = (
    ".pdf",
    ".doc",
    ".docx",
    ".xls",
    ".xlsx",
    ".ppt",
    ".pptx",
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".txt",
    ".zip",
    ".rar",
)

DEFAULT_DOCUMENT_CATEGORY = "personal"
DOCUMENT_CATEGORIES = ("personal", "work", "archive", "shared")

# Subdirectories created for every registered user.
USER_SUBDIRECTORIES = ("profile-photos", "documents", "portfolios")

# Subdirectories created under the storage root at startup.
BASE_SUBDIRECTORIES = ("users", "temp", "documents", "portfolios")

FILE_ID_LENGTH = 13

EXTENSION_ICONS = {
    "pdf": "fas fa-file-pdf",
    "doc": "fas fa-file-word",
    "docx": "fas fa-file-word",
    "xls": "fas fa-file-excel",
    "xlsx": "fas fa-file-excel",
    "jpg": "fas fa-file-image",
    "jpeg": "fas fa-file-image",
    "png": "fas fa-file-image",
    "gif": "fas fa-file-image",
    "zip": "fas fa-file-archive",
    "rar": "fas fa-file-archive",
    "txt": "fas fa-file-alt",
}
FOLDER_ICON = "fas fa-folder"
DEFAULT_FILE_ICON = "fas fa-file"

# Ordered (substring, icon) pairs matched against a lowercased content type.
CONTENT_TYPE_ICONS = (
    ("pdf", "fas fa-file-pdf"),
    ("word", "fas fa-file-word"),
    ("document", "fas fa-file-word"),
    ("excel", "fas fa-file-excel"),
    ("sheet", "fas fa-file-excel"),
    ("powerpoint", "fas fa-file-powerpoint"),
    ("presentation", "fas fa-file-powerpoint"),
    ("image", "fas fa-file-image"),
    ("zip", "fas fa-file-archive"),
    ("rar", "fas fa-file-archive"),
    ("text", "fas fa-file-alt"),
    ("plain", "fas fa-file-alt"),
)

STATUS_BADGE_COLORS = {
    "APPROVED": "success",
    "PENDING": "warning",
    "REJECTED": "danger",
}
