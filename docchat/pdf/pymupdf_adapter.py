import pymupdf

from docchat.documents.models import ExtractionResult
from docchat.pdf.base import BasePdfExtractor
from docchat.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts the PDF text layer using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return ExtractionResult(text="\n".join(pages).strip(), page_count=len(pages))
