from abc import ABC, abstractmethod

from docchat.documents.models import ExtractionResult


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        """Extract the text layer of every page, in page order.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ExtractionResult with page texts joined by newlines and the page count.

        Raises:
            PdfExtractionError: if the document cannot be parsed.
        """
