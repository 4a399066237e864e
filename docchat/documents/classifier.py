"""Maps a declared MIME type to the extractor variant that handles it."""

from pathlib import PurePath

from docchat.documents.exceptions import UnsupportedFormatError
from docchat.documents.models import DocumentFormat

MIME_FORMATS: dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (
        DocumentFormat.WORD
    ),
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (
        DocumentFormat.SPREADSHEET
    ),
    "application/vnd.ms-excel": DocumentFormat.SPREADSHEET,
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": (
        DocumentFormat.PRESENTATION
    ),
    "text/csv": DocumentFormat.DELIMITED_TEXT,
    "text/plain": DocumentFormat.PLAIN_TEXT,
    "text/markdown": DocumentFormat.PLAIN_TEXT,
    "application/json": DocumentFormat.PLAIN_TEXT,
}

EXTENSION_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xls": "application/vnd.ms-excel",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    ".csv": "text/csv",
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".json": "application/json",
}

_GENERIC_MIME_TYPE = "application/octet-stream"


def classify(mime_type: str, filename: str) -> DocumentFormat:
    """Return the extractor variant for ``mime_type``.

    Parameters on the MIME type (``; charset=utf-8``) are ignored. Any other
    ``text/*`` type belongs to the plain text family. A generic octet-stream
    upload is resolved from the filename extension.

    Raises:
        UnsupportedFormatError: if no variant handles the type.
    """
    base_type = mime_type.split(";", 1)[0].strip().lower()
    if base_type == _GENERIC_MIME_TYPE:
        base_type = EXTENSION_MIME_TYPES.get(PurePath(filename).suffix.lower(), base_type)

    document_format = MIME_FORMATS.get(base_type)
    if document_format is not None:
        return document_format
    if base_type.startswith("text/"):
        return DocumentFormat.PLAIN_TEXT
    raise UnsupportedFormatError(mime_type)


def guess_mime_type(filename: str) -> str:
    """Best-effort MIME type for a local file, used by the command-line driver."""
    return EXTENSION_MIME_TYPES.get(PurePath(filename).suffix.lower(), _GENERIC_MIME_TYPE)
