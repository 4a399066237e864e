from docchat.documents.models import ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor
from docchat.pdf.base import BasePdfExtractor


class PdfTextExtractor(BaseTextExtractor):
    """Routes PDF uploads to the configured PDF engine."""

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        return self._pdf_extractor.extract(document.content)
