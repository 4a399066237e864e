from pathlib import Path

from docchat.documents.models import (
    DigitalText,
    DocumentContent,
    GroundingPayload,
    ImageGrounding,
    RasterPage,
    Scanned,
    TextGrounding,
)
from docchat.grounding.prompt_loader import load_document_template
from docchat.logging.logger import Log

DEFAULT_MAX_CHARS = 100_000
TRUNCATION_MARKER = "\n\n[... text truncated ...]"


def truncate_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> str:
    """Cut ``text`` to ``max_chars`` and append TRUNCATION_MARKER.

    Text at or below the budget is returned unchanged.
    """
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


class ContextBuilder:
    """Frames document content into the grounding payload sent upstream."""

    def __init__(
        self,
        max_chars: int = DEFAULT_MAX_CHARS,
        template_path: Path | None = None,
    ) -> None:
        self._max_chars = max_chars
        self._template = load_document_template(template_path)

    def build(self, content: DocumentContent, filename: str) -> GroundingPayload:
        if isinstance(content, DigitalText):
            return self.build_text(content.text, filename)
        if isinstance(content, Scanned):
            return self.build_images(content.pages, filename, content.page_count)
        raise TypeError(f"Unknown document content: {type(content).__name__}")

    def build_text(self, text: str, filename: str) -> TextGrounding:
        body = truncate_text(text, self._max_chars)
        truncated = len(text) > self._max_chars
        if truncated:
            Log.info(f"Truncated {filename} from {len(text)} to {self._max_chars} chars")
        return TextGrounding(
            body=self._template.format(filename=filename, content=body),
            truncated=truncated,
        )

    def build_images(
        self,
        pages: list[RasterPage],
        filename: str,
        page_count: int,
    ) -> ImageGrounding:
        return ImageGrounding(caption=image_caption(filename, len(pages), page_count), pages=list(pages))


def image_caption(filename: str, shown: int, total: int) -> str:
    if total > shown:
        return f'Document: "{filename}" (first {shown} of {total} pages)'
    return f'Document: "{filename}" ({shown} page{"" if shown == 1 else "s"})'
