from abc import ABC, abstractmethod

from docchat.documents.models import ExtractionResult, UploadedDocument


class BaseTextExtractor(ABC):
    """Contract for per-format text extractors."""

    @abstractmethod
    def extract(self, document: UploadedDocument) -> ExtractionResult:
        """Convert the document into one normalized text blob.

        Raises:
            ExtractionFailedError: if the bytes cannot be parsed as this format.
        """
