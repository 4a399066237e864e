import io

from docx import Document

from docchat.documents.exceptions import ExtractionFailedError
from docchat.documents.models import ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor


class WordAdapter(BaseTextExtractor):
    """Extracts raw paragraph text from DOCX files using python-docx.

    Formatting, tables, images and embedded objects are dropped.
    """

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            doc = Document(io.BytesIO(document.content))
        except Exception as exc:
            raise ExtractionFailedError(f"docx extraction failed: {exc}") from exc
        return ExtractionResult(text="\n".join(p.text for p in doc.paragraphs))
