from docchat.documents.models import ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor

PLACEHOLDER_TEMPLATE = (
    "[PowerPoint file: {filename}] - Full text extraction is not available. "
    "Please describe what you would like to know."
)


class PresentationAdapter(BaseTextExtractor):
    """Stands in for presentation extraction with a fixed notice."""

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        return ExtractionResult(text=PLACEHOLDER_TEMPLATE.format(filename=document.filename))
