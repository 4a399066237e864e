from docchat.documents.exceptions import ExtractionFailedError
from docchat.documents.models import ExtractionResult, UploadedDocument
from docchat.extraction.base import BaseTextExtractor


class TextAdapter(BaseTextExtractor):
    """Passes csv, txt, markdown and json through as UTF-8 text, unmodified."""

    def extract(self, document: UploadedDocument) -> ExtractionResult:
        try:
            return ExtractionResult(text=document.content.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ExtractionFailedError(
                f"{document.filename} is not valid UTF-8 text: {exc}"
            ) from exc
