from docchat.config.settings import Settings
from docchat.documents.models import DocumentFormat, ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor
from docchat.extraction.pdf_adapter import PdfTextExtractor
from docchat.extraction.presentation_adapter import PresentationAdapter
from docchat.extraction.spreadsheet_adapter import SpreadsheetAdapter
from docchat.extraction.text_adapter import TextAdapter
from docchat.extraction.word_adapter import WordAdapter
from docchat.pdf.factory import PdfExtractorFactory


class ExtractorRegistry:
    """One extractor per DocumentFormat; construction fails if any format is unhandled."""

    def __init__(self, extractors: dict[DocumentFormat, BaseTextExtractor]) -> None:
        missing = [fmt.value for fmt in DocumentFormat if fmt not in extractors]
        if missing:
            raise ValueError(f"No extractor registered for formats: {missing}")
        self._extractors = dict(extractors)

    def extract(self, document: UploadedDocument, document_format: DocumentFormat) -> ExtractionResult:
        return self._extractors[document_format].extract(document)

    @classmethod
    def create(cls, settings: Settings) -> "ExtractorRegistry":
        text_adapter = TextAdapter()
        return cls(
            {
                DocumentFormat.PDF: PdfTextExtractor(PdfExtractorFactory.create(settings)),
                DocumentFormat.WORD: WordAdapter(),
                DocumentFormat.SPREADSHEET: SpreadsheetAdapter(),
                DocumentFormat.PRESENTATION: PresentationAdapter(),
                DocumentFormat.DELIMITED_TEXT: text_adapter,
                DocumentFormat.PLAIN_TEXT: text_adapter,
            }
        )
