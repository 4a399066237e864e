import io

import pdfplumber

from docchat.documents.models import ExtractionResult
from docchat.pdf.base import BasePdfExtractor
from docchat.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts the PDF text layer using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc
        return ExtractionResult(text="\n".join(pages).strip(), page_count=len(pages))
