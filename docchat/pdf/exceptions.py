from docchat.documents.exceptions import ExtractionFailedError


class PdfExtractionError(ExtractionFailedError):
    """Raised when a PDF text layer cannot be read."""


class RasterizationError(ExtractionFailedError):
    """Raised when any requested PDF page fails to render."""
