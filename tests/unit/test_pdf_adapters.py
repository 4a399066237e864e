import pytest

from docchat.documents.exceptions import ExtractionFailedError
from docchat.pdf.base import BasePdfExtractor
from docchat.pdf.exceptions import PdfExtractionError
from docchat.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docchat.pdf.pymupdf_adapter import PyMuPdfAdapter

ADAPTERS = [PdfPlumberAdapter, PyMuPdfAdapter]


@pytest.mark.parametrize("adapter_cls", ADAPTERS)
class TestPdfAdapters:
    def test_extract_returns_text_and_page_count(
        self, adapter_cls: type[BasePdfExtractor], sample_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert "Hello PDF World" in result.text
        assert result.page_count == 1

    def test_extract_multi_page_in_order(
        self, adapter_cls: type[BasePdfExtractor], multi_page_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(multi_page_pdf_bytes)
        assert result.page_count == 2
        assert result.text.index("Page one content") < result.text.index("Page two content")

    def test_extract_empty_pdf_returns_empty_text(
        self, adapter_cls: type[BasePdfExtractor], empty_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(empty_pdf_bytes)
        assert result.text == ""
        assert result.page_count == 1

    def test_extract_raises_on_invalid_bytes(self, adapter_cls: type[BasePdfExtractor]) -> None:
        with pytest.raises(PdfExtractionError):
            adapter_cls().extract(b"not a pdf")

    def test_extraction_error_is_an_extraction_failure(
        self, adapter_cls: type[BasePdfExtractor]
    ) -> None:
        with pytest.raises(ExtractionFailedError):
            adapter_cls().extract(b"not a pdf")

    def test_extract_is_deterministic(
        self, adapter_cls: type[BasePdfExtractor], digital_pdf_bytes: bytes
    ) -> None:
        adapter = adapter_cls()
        assert adapter.extract(digital_pdf_bytes) == adapter.extract(digital_pdf_bytes)

    def test_extract_result_is_stripped(
        self, adapter_cls: type[BasePdfExtractor], sample_pdf_bytes: bytes
    ) -> None:
        result = adapter_cls().extract(sample_pdf_bytes)
        assert result.text == result.text.strip()
