class DocumentError(Exception):
    """Base exception for failures turning an upload into grounding material."""

    status_code = 400


class UnsupportedFormatError(DocumentError):
    """Raised when no extractor variant exists for a MIME type."""

    status_code = 415

    def __init__(self, mime_type: str) -> None:
        super().__init__(f"Unsupported file type: {mime_type}")
        self.mime_type = mime_type


class OversizedUploadError(DocumentError):
    """Raised when an upload exceeds the configured byte limit."""

    status_code = 413

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"File too large: {size} bytes (limit {limit} bytes)")
        self.size = size
        self.limit = limit


class ExtractionFailedError(DocumentError):
    """Raised when an extractor cannot parse its input."""

    status_code = 422
